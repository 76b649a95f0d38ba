from pydantic import BaseModel, Field


class ObjectIdExtractRequest(BaseModel):
    text: str = Field(..., description="Free text to scan for aerospace object ids")


class ObjectIdExtractResponse(BaseModel):
    object_ids: list[str]


class ObjectIdComponents(BaseModel):
    object_id: str
    domain_code: str
    domain_name: str
    autonomy_code: str
    autonomy_name: str
    functional_class_code: str
    sub_type_code: str
    model_code: str
    serial_number: str
