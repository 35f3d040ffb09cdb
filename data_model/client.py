from collections.abc import Generator
from datetime import date

from boto3.dynamodb.conditions import Attr, ConditionBase, Key

from config import _Config, logger
from data_model.compliance_record import ComplianceRecord
from exceptions import ARDeserializationException


class DataClient:
    """
    Client interface for compliance record dynamodb queries

    botocore ClientErrors raised by the table are not caught here. Retries and timeouts are the job of the boto3
    client configuration.
    """

    def __init__(self, config: _Config):
        self.config = config

    def put_record(self, record: ComplianceRecord) -> None:
        """
        Write a compliance record, replacing any existing record with the same tag number

        The retest date is part of the table key, so a retest on a new date lands on a new item. Once the new item is
        written, any other items under the same tag number are deleted. The put and deletes are not transactional.
        """
        item = record.serialize_to_database_record()
        logger.info('Putting compliance record', tag_number=record.tagNumber, retest_date=record.retestDate)
        self.config.dynamodb_table.put_item(Item=item)

        stale_keys = [key for key in self._generate_keys(tag_number=item['pk']) if key['sk'] != item['sk']]
        for stale_key in stale_keys:
            logger.info('Deleting superseded compliance record', tag_number=record.tagNumber, retest_date=stale_key['sk'])
            self.config.dynamodb_table.delete_item(Key=stale_key)

    def scan_all(self) -> list[ComplianceRecord]:
        logger.info('Scanning all compliance records')
        return self._scan()

    def scan_by_voltage(self, voltage: int) -> list[ComplianceRecord]:
        logger.info('Scanning compliance records by voltage', voltage=voltage)
        # Voltage is stored as a string attribute, so we compare against its string form
        return self._scan(filter_expression=Attr('voltage').eq(str(voltage)))

    def scan_overdue(self, as_of: date) -> list[ComplianceRecord]:
        """
        Get every record that was due for retest before the provided date.

        Overdue records can sit under any partition key, so this can't be expressed as a key condition on the sort
        key. We scan the whole table and filter here instead.
        """
        logger.info('Scanning for overdue compliance records', as_of=as_of)
        return [record for record in self.scan_all() if record.retestDate < as_of]

    def _scan(self, *, filter_expression: ConditionBase | None = None) -> list[ComplianceRecord]:
        """
        Scan the table to completion, loading every item that comes back

        Items that can't be loaded are logged and skipped, so one bad item doesn't take down the whole scan.
        """
        records = []
        skipped = 0
        for item in self._generate_items(filter_expression=filter_expression):
            try:
                records.append(ComplianceRecord.from_database_record(item))
            except ARDeserializationException as e:
                logger.error('Unable to load compliance record, skipping', item=item, exc_info=e)
                skipped += 1
        logger.info('Completed scan', record_count=len(records), skipped_count=skipped)
        return records

    def _generate_keys(self, *, tag_number: str) -> Generator[dict, None, None]:
        """
        Query every key stored under a tag number
        """
        query_kwargs = {
            'KeyConditionExpression': Key('pk').eq(tag_number),
            'ProjectionExpression': 'pk, sk',
        }
        last_key = None
        while True:
            resp = self.config.dynamodb_table.query(
                **query_kwargs,
                **({'ExclusiveStartKey': last_key} if last_key is not None else {}),
            )
            yield from resp.get('Items', [])

            last_key = resp.get('LastEvaluatedKey')
            if last_key is None:
                return

    def _generate_items(self, *, filter_expression: ConditionBase | None) -> Generator[dict, None, None]:
        """
        Repeat the scan until DynamoDB stops returning a LastEvaluatedKey
        """
        scan_kwargs = {'Limit': self.config.scan_page_size}
        if filter_expression is not None:
            scan_kwargs['FilterExpression'] = filter_expression

        last_key = None
        while True:
            resp = self.config.dynamodb_table.scan(
                **scan_kwargs,
                **({'ExclusiveStartKey': last_key} if last_key is not None else {}),
            )
            yield from resp.get('Items', [])

            last_key = resp.get('LastEvaluatedKey')
            if last_key is None:
                return
