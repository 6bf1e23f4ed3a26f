"""
JSON schemas passed to the LLM as structured-output contracts.

Strict structured outputs require an object at the root, every property
listed in ``required`` and ``additionalProperties`` disabled, so the match
list is wrapped in a ``matches`` object.
"""

from typing import Any, Dict


def _string_props(descriptions: Dict[str, str]) -> Dict[str, Any]:
    return {
        name: {"type": "string", "description": text}
        for name, text in descriptions.items()
    }


def _object_schema(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


EXTRACTION_FIELDS: Dict[str, str] = {
    "programName": "The name of the grant program.",
    "eligibilityCriteria": "The eligibility criteria for the grant program.",
    "fundingAmount": "The funding amount offered by the grant program.",
    "deadline": "The application deadline for the grant program.",
    "description": "A brief description of the grant program.",
    "applicationProcess": "A description of the grant application process.",
    "contactInformation": "Contact information for the grant program.",
}

MATCH_FIELDS: Dict[str, Any] = {
    "programName": {
        "type": "string",
        "description": "The name of the matched grant program.",
    },
    "matchScore": {
        "type": "number",
        "description": "A score from 0 to 100 indicating how well the grant program matches the SME profile.",
    },
    **_string_props({
        "eligibility": "Eligibility details from the grant program details.",
        "fundingAmount": "Available funding amount for the grant.",
        "applicationDeadline": "Application deadline for the grant.",
        "sectors": "Sectors targeted by the grant program.",
        "location": "Location targeted by the grant program.",
    }),
}

GRANT_EXTRACTION_SCHEMA: Dict[str, Any] = _object_schema(_string_props(EXTRACTION_FIELDS))

GRANT_MATCH_SCHEMA: Dict[str, Any] = _object_schema({
    "matches": {
        "type": "array",
        "items": _object_schema(MATCH_FIELDS),
    },
})


def response_format(name: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a schema in the chat completions ``response_format`` envelope."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": name,
            "strict": True,
            "schema": schema,
        },
    }
