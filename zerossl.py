import logging
import time

import requests

from config import (
    POLL_DELAY_SECONDS,
    POLL_RETRIES,
    REQUEST_TIMEOUT,
    ROOT_URL,
    VALIDATION_METHOD,
    VALIDITY_DAYS,
)
from errors import (
    ApiError,
    DownloadError,
    InvalidCsrError,
    IssuanceError,
    ValidationTimeoutError,
    VerificationError,
)
from models import CertificateRecord, DownloadedCertificate, ValidationStatus


class ZeroSSLClient:
    def __init__(self, api_key, api_url=ROOT_URL, logger=None, session=None, timeout=REQUEST_TIMEOUT):
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.log = logger or logging.getLogger("zerossl")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, fields=None):
        url = self.api_url + path
        params = {"access_key": self.api_key}
        # (None, value) tuples make requests send plain multipart form fields
        files = {k: (None, str(v)) for k, v in fields.items()} if fields else None

        self.log.debug("%s %s", method, path, extra={"event": "http"})
        try:
            resp = self.session.request(method, url, params=params, files=files, timeout=self.timeout)
        except requests.RequestException as e:
            # requests puts the full URL, access key included, in its messages
            reason = str(e).replace(self.api_key, "***")
            raise ApiError(f"{method} {path} failed: {reason}") from None

        try:
            data = resp.json()
        except ValueError:
            data = None

        if not resp.ok:
            payload = data.get("error", data) if isinstance(data, dict) else resp.text
            raise ApiError(f"{method} {path} returned {resp.status_code}", resp.status_code, payload)
        if data is None:
            raise ApiError(f"{method} {path} returned a non-JSON body", resp.status_code, resp.text)
        if not isinstance(data, dict):
            raise ApiError(f"{method} {path} returned an unexpected body", resp.status_code, data)
        if data.get("success") is False:
            raise ApiError(f"{method} {path} was rejected", resp.status_code, data.get("error"))

        return data

    def validate_csr(self, csr):
        data = self._request("POST", "/validation/csr", {"csr": csr})
        valid = bool(data.get("valid"))
        if not valid:
            self.log.warning("CSR rejected by the CA: %s", data.get("error"), extra={"event": "csr_invalid"})
        return valid

    def create_certificate(self, domain, csr):
        try:
            valid = self.validate_csr(csr)
        except ApiError as e:
            raise InvalidCsrError(f"CSR validation failed: {e}") from e
        if not valid:
            raise InvalidCsrError("CSR is not valid")

        fields = {
            "certificate_domains": domain,
            "certificate_csr": csr,
            "certificate_validity_days": VALIDITY_DAYS,
        }
        try:
            data = self._request("POST", "/certificates", fields)
            record = CertificateRecord.from_json(data)
        except ApiError as e:
            raise IssuanceError(f"Certificate request for {domain} failed: {e}") from e
        except (KeyError, TypeError, AttributeError) as e:
            raise IssuanceError(f"Unexpected certificate record for {domain}: {e!r}") from e
        if not record.validation.other_methods:
            raise IssuanceError(f"Certificate {record.id} for {domain} has no validation methods")

        self.log.info(
            "Certificate %s requested for %s (%s)", record.id, domain, record.status,
            extra={"event": "certificate_created", "certificate_id": record.id},
        )
        return record

    def verify_domain(self, cert_id):
        try:
            data = self._request("POST", f"/certificates/{cert_id}/challenges",
                                 {"validation_method": VALIDATION_METHOD})
        except ApiError as e:
            raise VerificationError(f"Domain verification for {cert_id} failed: {e}") from e

        if "id" not in data:
            raise VerificationError(f"Domain verification for {cert_id} failed: {data.get('error', data)}")

        self.log.info("Verification triggered for %s (%s)", cert_id, data.get("status"),
                      extra={"event": "verification_triggered", "certificate_id": cert_id})
        return data.get("status")

    def get_status(self, cert_id):
        data = self._request("GET", f"/certificates/{cert_id}/status")
        try:
            completed = int(data.get("validation_completed") or 0)
        except (TypeError, ValueError) as e:
            raise ApiError(f"Unexpected status for {cert_id}", payload=data) from e
        return ValidationStatus(validation_completed=completed, details=data.get("details") or {})

    def wait_for_valid(self, cert_id, retries=POLL_RETRIES, delay=POLL_DELAY_SECONDS):
        status = self.get_status(cert_id)
        attempt = 0
        while not status.completed:
            if attempt >= retries:
                raise ValidationTimeoutError(
                    f"Validation of {cert_id} not completed after {retries + 1} status checks"
                )
            attempt += 1
            self.log.info("Validation pending for %s, retry %d/%d in %ss", cert_id, attempt, retries, delay,
                          extra={"event": "poll", "certificate_id": cert_id})
            time.sleep(delay)
            status = self.get_status(cert_id)

        self.log.info("Validation completed for %s", cert_id,
                      extra={"event": "validated", "certificate_id": cert_id})
        return status

    def download_certificate(self, cert_id):
        try:
            data = self._request("GET", f"/certificates/{cert_id}/download/return")
        except ApiError as e:
            raise DownloadError(f"Download of {cert_id} failed: {e}") from e

        cert_pem = data.get("certificate.crt")
        bundle_pem = data.get("ca_bundle.crt")
        if not cert_pem or not bundle_pem:
            missing = [k for k, v in (("certificate.crt", cert_pem), ("ca_bundle.crt", bundle_pem)) if not v]
            raise DownloadError(f"Download of {cert_id} is missing {', '.join(missing)}")

        return DownloadedCertificate(certificate_pem=cert_pem, ca_bundle_pem=bundle_pem)
