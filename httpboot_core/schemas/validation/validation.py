from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Severity(str, Enum):
    error = "error"
    warning = "warning"


class ValidationIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: Severity = Field(examples=["error"])
    field: str = Field(examples=["host_ip"])
    message: str = Field(
        examples=["host_ip (192.168.1.150) conflicts with DHCP range"]
    )


class ValidationReport(BaseModel):
    """Ordered issues found by a validator. Valid when no issue is an error."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not any(issue.severity == Severity.error for issue in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == Severity.error]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == Severity.warning]

    def add_error(self, field: str, message: str) -> None:
        self.issues.append(
            ValidationIssue(severity=Severity.error, field=field, message=message)
        )

    def add_warning(self, field: str, message: str) -> None:
        self.issues.append(
            ValidationIssue(severity=Severity.warning, field=field, message=message)
        )

    def extend(self, other: "ValidationReport") -> "ValidationReport":
        """New report holding this report's issues followed by other's"""
        return ValidationReport(issues=[*self.issues, *other.issues])
