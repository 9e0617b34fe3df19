import argparse
import os
import sys

from challenge import write_validation_file
from config import CA_BUNDLE_FILE, CERTIFICATE_FILE, load_config, load_env, log_path
from csr_utils import common_name, load_csr, read_csr
from errors import CertError, FilesystemError
from logger import build_logger, close_logger
from models import CertificateRequest
from zerossl import ZeroSSLClient


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="zerossl-cert",
        description="Request a ZeroSSL certificate using HTTP file validation.",
    )
    parser.add_argument("--domain", required=True, help="domain to issue the certificate for")
    parser.add_argument("--csr-path", required=True, help="path to a PEM encoded CSR")
    parser.add_argument("--project-dir", required=True, help="web root that serves /.well-known/")
    parser.add_argument("--log-file", help="defaults to $ZEROSSL_LOG_PATH or app.log")
    return parser.parse_args(argv)


def save_certificate(downloaded, output_dir="."):
    files = (
        (CERTIFICATE_FILE, downloaded.certificate_pem),
        (CA_BUNDLE_FILE, downloaded.ca_bundle_pem),
    )
    paths = []
    for name, content in files:
        path = os.path.join(output_dir, name)
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise FilesystemError(f"Cannot write {path}: {e}") from e
        paths.append(path)

    return paths


def issue_certificate(client, request, project_dir, logger, output_dir="."):
    certificate = client.create_certificate(request.domain, request.csr_pem)
    logger.info("Request certificate complete")

    validation_file = write_validation_file(certificate, project_dir, request.domain, logger)
    logger.info("Validation file has been created: %s", validation_file)

    client.verify_domain(certificate.id)
    client.wait_for_valid(certificate.id)

    downloaded = client.download_certificate(certificate.id)
    paths = save_certificate(downloaded, output_dir)
    logger.info("Certificate saved to %s", ", ".join(paths),
                extra={"event": "done", "certificate_id": certificate.id})

    return paths


def main(argv=None):
    args = parse_args(argv)
    load_env()
    logger = build_logger(args.log_file or log_path())
    try:
        config = load_config()

        csr_pem = read_csr(args.csr_path)
        cn = common_name(load_csr(csr_pem))
        if cn and cn != args.domain:
            logger.warning("CSR common name %s does not match domain %s", cn, args.domain)

        request = CertificateRequest(domain=args.domain, csr_pem=csr_pem)
        client = ZeroSSLClient(config.api_key, config.api_url, logger=logger)
        issue_certificate(client, request, args.project_dir, logger)
    except CertError as e:
        logger.exception("%s: %s", type(e).__name__, e, extra={"event": "failed"})
        return 1
    finally:
        close_logger(logger)

    return 0


if __name__ == "__main__":
    sys.exit(main())
