from dataclasses import dataclass, field
from typing import Dict, List, Optional
from urllib.parse import urlsplit


@dataclass(frozen=True)
class CertificateRequest:
    domain: str
    csr_pem: str


@dataclass(frozen=True)
class ValidationMethod:
    file_validation_url_http: str
    file_validation_content: List[str]

    @classmethod
    def from_json(cls, data: dict) -> "ValidationMethod":
        content = data["file_validation_content"]
        if not isinstance(content, list):
            raise TypeError(f"file_validation_content must be a list, got {type(content).__name__}")
        return cls(
            file_validation_url_http=data["file_validation_url_http"],
            file_validation_content=[str(line) for line in content],
        )

    @property
    def file_name(self) -> str:
        path = urlsplit(self.file_validation_url_http).path
        return path.rsplit("/", 1)[-1]

    @property
    def file_content(self) -> str:
        return "\n".join(self.file_validation_content)


@dataclass(frozen=True)
class ValidationInfo:
    other_methods: Dict[str, ValidationMethod]

    @classmethod
    def from_json(cls, data: dict) -> "ValidationInfo":
        # dict keeps the order the API returned the methods in
        methods = data.get("other_methods") or {}
        return cls(other_methods={k: ValidationMethod.from_json(v) for k, v in methods.items()})

    def select_method(self, domain: Optional[str] = None) -> ValidationMethod:
        """Pick the HTTP file validation method to satisfy.

        ZeroSSL keys ``other_methods`` by domain, so the entry for ``domain``
        wins. Without one, the first method in response order is used.
        """
        if not self.other_methods:
            raise LookupError("certificate has no validation methods")
        if domain and domain in self.other_methods:
            return self.other_methods[domain]
        return next(iter(self.other_methods.values()))


@dataclass(frozen=True)
class CertificateRecord:
    id: str
    status: str
    validation: ValidationInfo
    common_name: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> "CertificateRecord":
        return cls(
            id=data["id"],
            status=data.get("status", ""),
            common_name=data.get("common_name"),
            validation=ValidationInfo.from_json(data.get("validation") or {}),
        )


@dataclass(frozen=True)
class ValidationStatus:
    validation_completed: int
    details: dict = field(default_factory=dict)

    @property
    def completed(self) -> bool:
        return self.validation_completed == 1


@dataclass(frozen=True)
class DownloadedCertificate:
    certificate_pem: str
    ca_bundle_pem: str
