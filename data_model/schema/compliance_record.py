# ruff: noqa: N815 invalid-name
from marshmallow import ValidationError, post_load, pre_dump, validates_schema
from marshmallow.fields import Decimal, Enum, Integer, String
from marshmallow.validate import Length

from data_model.retest_schedule import EnvironmentClass, compute_retest
from data_model.schema.base_record import CanonicalDate, StringAttributeSchema


class ComplianceRecordSchema(StringAttributeSchema):
    """
    Schema for compliance records in the appliance table

    Every attribute is stored as a string. The tag number and retest date are stored as the table's partition and
    sort keys, pk and sk, and are renamed to tagNumber and retestDate on load.

    Dump a dict of typed values to get a table item. The retest date is recalculated on every dump, and any
    retestDate passed in is ignored.
    """

    # Generated fields
    pk = String(required=True, allow_none=False, validate=Length(min=1))
    sk = CanonicalDate(required=True, allow_none=False)

    # Provided fields
    name = String(required=True, allow_none=False)
    description = String(required=True, allow_none=False)
    insulationResistance = Decimal(required=True, allow_none=False, as_string=True)
    resistanceToEarth = Decimal(required=True, allow_none=False, as_string=True)
    voltage = Integer(required=True, allow_none=False, as_string=True)
    testedBy = String(required=True, allow_none=False)
    environment = Enum(EnvironmentClass, by_value=True, required=True, allow_none=False)
    testDate = CanonicalDate(required=True, allow_none=False)

    @validates_schema
    def validate_retest_date(self, data, **kwargs):  # noqa: ARG002 unused-argument
        try:
            expected = compute_retest(data['testDate'], data['environment'])
        except ValueError as e:
            raise ValidationError({'testDate': ['Retest date falls beyond the last supported date.']}) from e
        if data['sk'] != expected:
            raise ValidationError(
                {'sk': [f'Retest date {data["sk"].isoformat()} does not match expected {expected.isoformat()}']}
            )

    @post_load
    def drop_db_keys(self, in_data, **kwargs):  # noqa: ARG002 unused-argument
        """
        Swap the db-specific pk and sk fields for their business names before returning loaded data
        """
        in_data['tagNumber'] = in_data.pop('pk')
        in_data['retestDate'] = in_data.pop('sk')
        return in_data

    @pre_dump
    def populate_generated_fields(self, in_data, **kwargs):  # noqa: ARG002 unused-argument
        """
        Populate db-specific fields before dumping to the database
        """
        out_data = {key: value for key, value in in_data.items() if key not in ('tagNumber', 'retestDate')}
        out_data['pk'] = in_data['tagNumber']
        # YYYY-MM-DD
        out_data['sk'] = compute_retest(in_data['testDate'], in_data['environment'])
        return out_data
