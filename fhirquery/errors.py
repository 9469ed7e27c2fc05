from typing import Union, List, Optional

from fhir.resources.operationoutcome import OperationOutcome


class FHIRQueryError(Exception):
    """
    Base error of the search translation. Each message becomes an issue of
    the OperationOutcome returned by `format`, pointing at `expression`
    (the faulty search parameter) when it is known.
    """

    severity = "error"
    code = "invalid"

    def __init__(self, error: Union[None, str, List[str]] = None, expression: Optional[str] = None):
        if isinstance(error, list):
            self.errors = error
        elif isinstance(error, str):
            self.errors = [error]
        else:
            self.errors = []
        self.expression = expression

        super().__init__(*self.errors)

    def issue(self, diagnostics: str) -> dict:
        issue = {"severity": self.severity, "code": self.code, "diagnostics": diagnostics}
        if self.expression:
            issue["expression"] = [self.expression]
        return issue

    def format(self, as_json=False) -> Union[OperationOutcome, dict]:
        outcome = OperationOutcome(issue=[self.issue(err) for err in self.errors])
        return outcome.model_dump() if as_json else outcome


class InvalidSearchParameter(FHIRQueryError):
    """
    InvalidSearchParameter is raised when a search request cannot be translated
    into a query: malformed values, unknown parameters or unparsable typed values.
    """

    def __init__(self, error: str, param: Optional[str] = None):
        super().__init__(error, expression=param)
        self.param = param


class RegistryError(FHIRQueryError):
    """
    RegistryError is raised when search parameter definitions cannot be loaded.
    """

    severity = "fatal"
    code = "exception"
