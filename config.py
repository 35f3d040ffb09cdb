import logging
import os
from functools import cached_property

import boto3
from aws_lambda_powertools.logging import Logger
from botocore.config import Config as BotoConfig

logging.basicConfig()
logger = Logger()
logger.setLevel(logging.DEBUG if os.environ.get('DEBUG', 'false').lower() == 'true' else logging.INFO)


class _Config:
    scan_page_size = 100
    store_connect_timeout_seconds = 5
    store_read_timeout_seconds = 10
    store_max_attempts = 3

    @cached_property
    def dynamodb_table(self):
        return boto3.resource(
            'dynamodb',
            config=BotoConfig(
                connect_timeout=self.store_connect_timeout_seconds,
                read_timeout=self.store_read_timeout_seconds,
                retries={'mode': 'standard', 'max_attempts': self.store_max_attempts},
            ),
        ).Table(self.appliance_table_name)

    @cached_property
    def data_client(self):
        from data_model.client import DataClient

        return DataClient(self)

    @property
    def appliance_table_name(self):
        return os.environ['APPLIANCE_TABLE_NAME']


config = _Config()
