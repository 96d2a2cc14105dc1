import argparse
import asyncio
import json
import os
import uuid as _uuid

from config.settings import get_settings
from pipelines.discover_people import build_sources, discover_key_people_sync
from services.domain_utils import resolve_email_domain
from services.email_verifier import EmailVerifier, predict_and_verify_email
from services.reporting import print_summary
from utils.logging_setup import init_logging


def _ensure_run_id():
    if not os.getenv("RUN_ID"):
        os.environ["RUN_ID"] = _uuid.uuid4().hex


def _print_json(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_discover(args):
    _ensure_run_id()
    result = discover_key_people_sync(args.company, args.website)
    if args.json:
        _print_json(result.model_dump(by_alias=True, mode="json"))
        return
    print_summary(result, args.company, args.website)


def cmd_predict_email(args):
    domain = resolve_email_domain(args.company, args.website)
    prediction = asyncio.run(predict_and_verify_email(args.name, domain, EmailVerifier()))
    _print_json({"domain": domain, **prediction.model_dump(mode="json")})


def cmd_verify_email(args):
    verification = asyncio.run(EmailVerifier().verify(args.email))
    _print_json(verification.model_dump(by_alias=True, mode="json"))


def cmd_sources(args):
    out = []
    for src in build_sources():
        out.append({"source": src.source_name, "configured": src.is_configured()})
    _print_json(out)


def main(argv=None):
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="Key people discovery CLI")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_disc = sub.add_parser("discover", help="Find up to five key people for a company")
    p_disc.add_argument("--company", "-c", required=True, help="Company name")
    p_disc.add_argument("--website", "-w", default=None, help="Company website (optional)")
    p_disc.add_argument("--json", action="store_true", help="Print the result as JSON instead of a summary")
    p_disc.set_defaults(func=cmd_discover)

    p_pred = sub.add_parser("predict-email", help="Predict and verify an email for one person")
    p_pred.add_argument("--name", required=True, help="Person name")
    p_pred.add_argument("--company", required=True, help="Company name")
    p_pred.add_argument("--website", default=None, help="Company website (optional)")
    p_pred.set_defaults(func=cmd_predict_email)

    p_ver = sub.add_parser("verify-email", help="Score deliverability of one address")
    p_ver.add_argument("email", help="Email address")
    p_ver.set_defaults(func=cmd_verify_email)

    p_src = sub.add_parser("sources", help="List people sources and whether they are configured")
    p_src.set_defaults(func=cmd_sources)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
