# dashboard/models/forms.py

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError


class FormState(BaseModel):
    """What a form action hands back when it did not redirect."""

    errors: Dict[str, List[str]] = Field(default_factory=dict)
    message: Optional[str] = None


class Redirect(BaseModel):
    url: str


def flatten_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """
    Collapse a pydantic ValidationError into ``{field: [messages]}``.

    Errors without a field location are dropped.
    """
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        if not error["loc"]:
            continue
        field = str(error["loc"][0])
        field_errors.setdefault(field, []).append(error["msg"])
    return field_errors
