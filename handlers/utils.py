import json
from collections.abc import Callable
from datetime import date
from decimal import Decimal
from functools import wraps
from json import JSONEncoder

from aws_lambda_powertools.utilities.typing import LambdaContext
from botocore.exceptions import ClientError

from config import logger
from exceptions import ARInvalidRequestException, ARUnsupportedMediaTypeException


class ResponseEncoder(JSONEncoder):
    """
    JSON Encoder to handle data types that come out of our schema
    """

    def default(self, o):
        if isinstance(o, Decimal):
            ratio = o.as_integer_ratio()
            if ratio[1] == 1:
                return ratio[0]
            return float(o)

        if isinstance(o, date):
            return o.isoformat()

        # This is just a catch-all that shouldn't realistically ever be reached.
        return super().default(o)


def _response(status_code: int, body) -> dict:
    return {
        'headers': {'Access-Control-Allow-Origin': '*'},
        'statusCode': status_code,
        'body': json.dumps(body, cls=ResponseEncoder),
    }


def api_handler(fn: Callable):
    """Decorator to wrap an api gateway event handler in standard logging, HTTPError handling.

    - Logs each access
    - JSON-encodes returned responses
    - Translates ARBaseException subclasses and store failures to their respective HTTP response codes
    """

    @wraps(fn)
    @logger.inject_lambda_context
    def caught_handler(event, context: LambdaContext):
        # We have to jump through extra hoops to handle the case where APIGW sets headers to null
        headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
        headers.pop('authorization', None)
        event['headers'] = headers
        (event.get('multiValueHeaders') or {}).pop('Authorization', None)
        content_type = headers.get('content-type')

        logger.info(
            'Incoming request',
            method=event['httpMethod'],
            path=event['requestContext']['resourcePath'],
            path_params=event.get('pathParameters'),
            content_type=content_type,
        )

        try:
            # We'll enforce json-only content for the whole API, right here.
            if event.get('body') is not None and content_type != 'application/json':
                raise ARUnsupportedMediaTypeException(f'Unsupported media type: {content_type}')

            return _response(200, fn(event, context))
        except ARUnsupportedMediaTypeException as e:
            logger.info('Unsupported media type', exc_info=e)
            return _response(415, {'message': 'Unsupported media type'})
        except ARInvalidRequestException as e:
            logger.info('Invalid request', exc_info=e)
            return _response(400, {'message': e.message})
        except json.JSONDecodeError as e:
            logger.warning('Invalid JSON in request body', exc_info=e)
            return _response(400, {'message': 'Invalid request: Malformed JSON'})
        except ClientError as e:
            # The appliance table is a dependency of every endpoint, so boto3 failures are reported as such
            logger.error('boto3 ClientError', response=e.response, exc_info=e)
            return _response(424, {'message': 'Failed dependency'})
        except Exception as e:
            logger.warning(
                'Error processing request',
                method=event['httpMethod'],
                path=event['requestContext']['resourcePath'],
                exc_info=e,
            )
            raise

    return caught_handler
