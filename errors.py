class CertError(Exception):
    """Base class for every failure that aborts a certificate run."""


class ConfigError(CertError):
    pass


class ApiError(CertError):
    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    def __str__(self):
        text = super().__str__()
        if self.payload:
            text = f"{text}: {self.payload}"
        return text


class InvalidCsrError(CertError):
    pass


class IssuanceError(CertError):
    pass


class FilesystemError(CertError):
    pass


class VerificationError(CertError):
    pass


class ValidationTimeoutError(CertError, TimeoutError):
    pass


class DownloadError(CertError):
    pass
