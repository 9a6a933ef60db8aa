# urlsigner/cli.py
"""
Command line signer.

    urlsigner sign "https://site.com/file?id=50" --ttl 600
    urlsigner verify "<signed url>"      # exit 0 valid, 1 invalid, 2 expired
    urlsigner signature "<any string>"

Secret and defaults come from the environment / .env (SIGNER_SECRET, ...),
same as the HTTP service. --secret overrides.
"""
import argparse
import sys
from typing import List, Optional

from .config import get_settings
from .core.config import configure
from .core.errors import UrlSignerError
from .core.signer import get_signed_url, get_url_signature
from .core.verifier import VerificationOutcome, verify_signed_url

EXIT_CODES = {
    VerificationOutcome.VALID: 0,
    VerificationOutcome.INVALID: 1,
    VerificationOutcome.EXPIRED: 2,
}


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="urlsigner", description="Sign and verify expiring URLs.")
    parser.add_argument("--secret", default=settings.SIGNER_SECRET, help="HMAC secret (default: $SIGNER_SECRET)")
    parser.add_argument("--algorithm", default=settings.SIGNER_ALGORITHM)
    parser.add_argument("--digest", default=settings.SIGNER_DIGEST)
    sub = parser.add_subparsers(dest="command", required=True)

    p_sign = sub.add_parser("sign", help="print the signed URL")
    p_sign.add_argument("url")
    p_sign.add_argument("--ttl", type=int, default=settings.SIGNER_DEFAULT_TTL, help="seconds, 0 = never expire")

    p_verify = sub.add_parser("verify", help="check a signed URL")
    p_verify.add_argument("url")

    p_sig = sub.add_parser("signature", help="print the raw signature of a string")
    p_sig.add_argument("url")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = configure(
            args.secret,
            algorithm=args.algorithm,
            digest=args.digest,
            ttl=getattr(args, "ttl", None),
        )
        if args.command == "sign":
            print(get_signed_url(config, args.url))
            return 0
        if args.command == "signature":
            print(get_url_signature(config, args.url))
            return 0
        outcome = verify_signed_url(config, args.url)
        print(outcome.value)
        return EXIT_CODES[outcome]
    except UrlSignerError as e:
        print(f"urlsigner: {e}", file=sys.stderr)
        return 64


if __name__ == "__main__":
    sys.exit(main())
