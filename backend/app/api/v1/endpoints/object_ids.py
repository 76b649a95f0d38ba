# backend/app/api/v1/endpoints/object_ids.py
from fastapi import APIRouter, HTTPException

from app.schemas.object_id import (
    ObjectIdComponents,
    ObjectIdExtractRequest,
    ObjectIdExtractResponse,
)
from infotrace_sdk.object_ids import extract_object_ids, object_id_components

router = APIRouter()


@router.post("/extract", response_model=ObjectIdExtractResponse)
def extract(body: ObjectIdExtractRequest):
    return ObjectIdExtractResponse(object_ids=extract_object_ids(body.text))


@router.get("/{object_id}", response_model=ObjectIdComponents)
def describe_object_id(object_id: str):
    components = object_id_components(object_id)
    if components is None:
        raise HTTPException(status_code=404, detail="Not a valid aerospace object id")
    return ObjectIdComponents(object_id=object_id, **components)
