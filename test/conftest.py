import pytest

from fhirquery import SearchParametersRegistry

SEARCH_PARAMETERS = {
    "Resource": [
        {"name": "_id", "type": "token", "compiled": [{"resourceType": "Resource", "path": "id"}]},
        {
            "name": "_lastUpdated",
            "type": "date",
            "compiled": [{"resourceType": "Resource", "path": "meta.lastUpdated"}],
        },
    ],
    "Patient": [
        {"name": "name", "type": "string", "compiled": [{"resourceType": "Patient", "path": "name"}]},
        {"name": "gender", "type": "token", "compiled": [{"resourceType": "Patient", "path": "gender"}]},
        {
            "name": "birthdate",
            "type": "date",
            "compiled": [{"resourceType": "Patient", "path": "birthDate"}],
        },
        {
            "name": "phone",
            "type": "token",
            "compiled": [
                {
                    "resourceType": "Patient",
                    "path": "telecom",
                    "condition": ["telecom.system", "=", "phone"],
                }
            ],
        },
        {
            "name": "general-practitioner",
            "type": "reference",
            "compiled": [{"resourceType": "Patient", "path": "generalPractitioner"}],
        },
        {
            "name": "language",
            "type": "special",
            "compiled": [{"resourceType": "Patient", "path": "communication.language"}],
        },
    ],
    "Observation": [
        {
            "name": "date",
            "type": "date",
            "compiled": [
                {"resourceType": "Observation", "path": "effectiveDateTime"},
                {"resourceType": "Observation", "path": "effectivePeriod"},
            ],
        },
        {
            "name": "value-quantity",
            "type": "quantity",
            "compiled": [{"resourceType": "Observation", "path": "valueQuantity"}],
        },
        {
            "name": "code-value-quantity",
            "type": "composite",
            "compiled": [{"resourceType": "Observation", "path": "code"}],
        },
    ],
    "RiskAssessment": [
        {
            "name": "probability",
            "type": "number",
            "compiled": [{"resourceType": "RiskAssessment", "path": "prediction.probabilityDecimal"}],
        },
    ],
}


@pytest.fixture(scope="session")
def registry():
    return SearchParametersRegistry(SEARCH_PARAMETERS)
