import json
import logging
import os

import boto3
from moto import mock_aws

from tests import TstLambdas

logger = logging.getLogger(__name__)
logging.basicConfig()
logger.setLevel(logging.DEBUG if os.environ.get('DEBUG', 'false') == 'true' else logging.INFO)


@mock_aws
class TstFunction(TstLambdas):
    """
    Base class to set up Moto mocking and create mock AWS resources for functional testing
    """

    def setUp(self):
        super().setUp()

        self.build_resources()

        self.addCleanup(self.delete_resources)

    def build_resources(self):
        self._table = boto3.resource('dynamodb').create_table(
            AttributeDefinitions=[
                {'AttributeName': 'pk', 'AttributeType': 'S'},
                {'AttributeName': 'sk', 'AttributeType': 'S'},
            ],
            TableName=os.environ['APPLIANCE_TABLE_NAME'],
            KeySchema=[{'AttributeName': 'pk', 'KeyType': 'HASH'}, {'AttributeName': 'sk', 'KeyType': 'RANGE'}],
            BillingMode='PAY_PER_REQUEST',
        )

    def delete_resources(self):
        self._table.delete()

    def _load_submission(self, **overrides) -> dict:
        with open('tests/resources/api/appliance-post.json') as f:
            return {**json.load(f), **overrides}

    def _put_appliance(self, **overrides):
        """
        Put a compliance record straight into the table, bypassing the API
        """
        from data_model.compliance_record import ComplianceRecord

        # We'll use the data class/serializer to populate key fields for us
        record = ComplianceRecord.create_new(self._load_submission(**overrides))
        item = record.serialize_to_database_record()
        logger.debug('Putting appliance: %s', json.dumps(item))
        self._table.put_item(Item=item)
        return record
