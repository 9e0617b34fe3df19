from unittest.mock import MagicMock

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID


def make_response(body=None, status_code=200, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.text = text
    if body is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body
    return resp


def make_csr_pem(common_name="example.com"):
    key = ec.generate_private_key(ec.SECP256R1())
    csr = (
        x509.CertificateSigningRequestBuilder()
        .subject_name(x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)]))
        .sign(key, hashes.SHA256())
    )
    return csr.public_bytes(serialization.Encoding.PEM).decode()


def certificate_json(cert_id="abc123", url="http://example.com/.well-known/pki-validation/xyz.txt",
                     content=("line1", "line2"), key="example.com"):
    return {
        "id": cert_id,
        "status": "draft",
        "common_name": "example.com",
        "validation": {
            "email_validation": {},
            "other_methods": {
                key: {
                    "file_validation_url_http": url,
                    "file_validation_url_https": url.replace("http://", "https://"),
                    "file_validation_content": list(content),
                    "cname_validation_p1": "",
                    "cname_validation_p2": "",
                }
            },
        },
    }
