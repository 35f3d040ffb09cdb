import json

from aws_lambda_powertools.utilities.typing import LambdaContext

from config import config, logger
from data_model.compliance_record import ComplianceRecord
from data_model.retest_schedule import parse_date
from data_model.schema.api import ComplianceRecordResponseSchema
from exceptions import ARInvalidRequestException
from handlers.utils import api_handler

_response_schema = ComplianceRecordResponseSchema()


def _records_response(records: list[ComplianceRecord]) -> dict:
    return {'items': _response_schema.dump([record.to_dict() for record in records], many=True)}


@api_handler
def submit_appliance(event: dict, context: LambdaContext):  # noqa: ARG001 unused-argument
    """Record a new appliance test result
    :param event: Standard API Gateway event, with a JSON body of string fields: name, description,
    insulationResistance, resistanceToEarth, voltage, testedBy, tagNumber, environment, date
    :param LambdaContext context:
    """
    if event.get('body') is None:
        raise ARInvalidRequestException('Request body is required')
    record = ComplianceRecord.create_new(json.loads(event['body']))

    config.data_client.put_record(record)
    logger.info('Recorded appliance test', tag_number=record.tagNumber, retest_date=record.retestDate)
    return {'tagNumber': record.tagNumber}


@api_handler
def get_appliances(event: dict, context: LambdaContext):  # noqa: ARG001 unused-argument
    """Return every appliance record"""
    return _records_response(config.data_client.scan_all())


@api_handler
def get_240v_appliances(event: dict, context: LambdaContext):  # noqa: ARG001 unused-argument
    return _records_response(config.data_client.scan_by_voltage(240))


@api_handler
def get_115v_appliances(event: dict, context: LambdaContext):  # noqa: ARG001 unused-argument
    return _records_response(config.data_client.scan_by_voltage(115))


@api_handler
def get_overdue_appliances(event: dict, context: LambdaContext):  # noqa: ARG001 unused-argument
    """Return every appliance that was due for retest before the date in the path
    :param event: Standard API Gateway event, with a 'date' path parameter in YYYY-MM-DD form
    :param LambdaContext context:
    """
    try:
        as_of = event['pathParameters']['date']
    except (KeyError, TypeError) as e:
        # This shouldn't happen without miss-configuring the API, but we'll handle it, anyway
        logger.error(f'Missing parameter: {e}')
        raise ARInvalidRequestException('date is required') from e

    return _records_response(config.data_client.scan_overdue(parse_date(as_of)))
