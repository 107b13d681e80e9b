"""
companies/schemas.py -- Write-payload schemas for the tenant resources.

Each get_*_schema(t) builder returns a SchemaValidator whose field messages
come from the given MessageResolver (normally the "Schemas" namespace of the
request locale). The same builders serve the JSON handlers and the
server-rendered forms, so both report identical messages.

Payload keys are camelCase on the wire; the parsed models expose snake_case
attributes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from core.i18n import MessageResolver
from core.validation import SchemaValidator


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompanyPayload(_Payload):
    id: str = Field(min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_-]+$")
    name: str = Field(min_length=1)
    tin: str = Field(min_length=10, max_length=10, pattern=r"^[0-9]+$")
    description: str = Field(min_length=50)
    image_id: Optional[str] = None
    description_ru: Optional[str] = None
    slogan: Optional[str] = None
    slogan_ru: Optional[str] = None


class StockPayload(_Payload):
    name: str = Field(min_length=1)


class PriceTypePayload(_Payload):
    name: str = Field(min_length=1)
    currency: str = Field(min_length=1)


class MemberPayload(_Payload):
    role_id: str = Field(min_length=1)


class InvitationPayload(_Payload):
    email: EmailStr
    role_id: str = Field(min_length=1)


class PriceTypeRef(_Payload):
    price_type_id: str = Field(min_length=1)


class AvailableDataPayload(_Payload):
    stock_id: str = Field(min_length=1)
    price_types: list[PriceTypeRef]


class RolePayload(_Payload):
    name: str = Field(min_length=1)
    available_data: list[AvailableDataPayload]


def get_company_schema(t: MessageResolver) -> SchemaValidator[CompanyPayload]:
    return SchemaValidator(
        CompanyPayload,
        t,
        {
            "id": "invalidId",
            "name": "invalidName",
            "tin": "invalidTin",
            "description": "invalidDescription",
        },
        overrides={
            ("id", "string_pattern_mismatch"): "invalidIdFormat",
            ("id", "string_too_long"): "invalidIdFormat",
            ("tin", "string_pattern_mismatch"): "numericTin",
        },
    )


def get_stock_schema(t: MessageResolver) -> SchemaValidator[StockPayload]:
    return SchemaValidator(StockPayload, t, {"name": "invalidName"})


def get_price_type_schema(t: MessageResolver) -> SchemaValidator[PriceTypePayload]:
    return SchemaValidator(PriceTypePayload, t, {"name": "invalidName", "currency": "invalidCurrency"})


def get_member_schema(t: MessageResolver) -> SchemaValidator[MemberPayload]:
    return SchemaValidator(MemberPayload, t, {"roleId": "invalidRoleId"})


def get_invitation_schema(t: MessageResolver) -> SchemaValidator[InvitationPayload]:
    return SchemaValidator(InvitationPayload, t, {"email": "invalidEmail", "roleId": "invalidRoleId"})


def get_role_schema(t: MessageResolver) -> SchemaValidator[RolePayload]:
    """Role name plus a list of {stockId, priceTypes: [{priceTypeId}]} grants.

    A stock listed with an empty priceTypes list grants nothing.
    """
    return SchemaValidator(
        RolePayload,
        t,
        {
            "name": "invalidName",
            "availableData": "invalidAvailableData",
            "stockId": "invalidStockId",
            "priceTypes": "invalidPriceTypeId",
            "priceTypeId": "invalidPriceTypeId",
        },
    )
