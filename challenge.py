import logging
import os

from errors import FilesystemError, IssuanceError

WELL_KNOWN_DIR = ".well-known"
PKI_VALIDATION_DIR = "pki-validation"


def _strip_trailing_sep(path):
    if len(path) > 1 and path[-1] in ("/", os.sep):
        return path[:-1]
    return path


def _ensure_dir(path):
    if not os.path.isdir(path):
        os.mkdir(path)


def write_validation_file(certificate, project_dir, domain=None, logger=None):
    """Write the HTTP file validation artifact for ``certificate``.

    The file lands in ``<project_dir>/.well-known/pki-validation/`` and any
    existing file with the same name is overwritten. Returns its absolute path.
    """
    log = logger or logging.getLogger("zerossl")
    root = _strip_trailing_sep(project_dir)
    well_known = os.path.join(root, WELL_KNOWN_DIR)
    pki_validation = os.path.join(well_known, PKI_VALIDATION_DIR)

    try:
        method = certificate.validation.select_method(domain)
    except LookupError as e:
        raise IssuanceError(f"Certificate {certificate.id}: {e}") from e

    file_name = method.file_name
    if file_name in ("", ".", ".."):
        raise FilesystemError(f"No file name in validation URL {method.file_validation_url_http!r}")

    path = os.path.join(pki_validation, file_name)
    try:
        _ensure_dir(well_known)
        _ensure_dir(pki_validation)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(method.file_content)
    except OSError as e:
        raise FilesystemError(f"Cannot write validation file {path}: {e}") from e

    path = os.path.abspath(path)
    log.info("Validation file written to %s", path, extra={"event": "challenge_written", "path": path})
    return path
