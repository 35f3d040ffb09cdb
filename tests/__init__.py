import os
from unittest import TestCase
from unittest.mock import MagicMock

from aws_lambda_powertools.utilities.typing import LambdaContext


class TstLambdas(TestCase):
    @classmethod
    def setUpClass(cls):
        os.environ.update(
            {
                # Set to 'true' to enable debug logging
                'DEBUG': 'false',
                'AWS_DEFAULT_REGION': 'us-east-1',
                'AWS_ACCESS_KEY_ID': 'testing',
                'AWS_SECRET_ACCESS_KEY': 'testing',
                'APPLIANCE_TABLE_NAME': 'appliance',
            }
        )
        import config

        cls.config = config.config
        cls.mock_context = MagicMock(name='MockLambdaContext', spec=LambdaContext)

    def setUp(self):
        super().setUp()
        # Handlers bind the config singleton at import, so rather than replacing it, we clear its cached
        # resources to be sure each test gets clients built against its own environment
        for cached in ('dynamodb_table', 'data_client'):
            vars(self.config).pop(cached, None)
