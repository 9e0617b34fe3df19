from cryptography import x509
from cryptography.x509.oid import NameOID

from errors import FilesystemError, InvalidCsrError


def read_csr(path) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise FilesystemError(f"Cannot read CSR file {path}: {e}") from e


def load_csr(pem: str) -> x509.CertificateSigningRequest:
    try:
        return x509.load_pem_x509_csr(pem.encode())
    except ValueError as e:
        raise InvalidCsrError(f"CSR is not a valid PEM certificate request: {e}") from e


def common_name(csr: x509.CertificateSigningRequest):
    attrs = csr.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    if not attrs:
        return None
    return attrs[0].value
