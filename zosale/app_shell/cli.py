import argparse
import logging
import sys
from pathlib import Path

from zosale.adapters.clock import SystemClock
from zosale.adapters.sqlite.migrator import SQLiteMigrator
from zosale.adapters.sqlite.repos import SQLiteServiceRepo
from zosale.api.deps import Settings
from zosale.components.export import generate_csv, generate_report_html
from zosale.components.filtering import FilterSpec
from zosale.components.services import (
    FilterListInput,
    ServiceIdInput,
    ServiceRecordService,
    ServiceValidationError,
    run_delete,
    run_disable,
    run_enable,
    run_filter_list,
    run_list,
    run_summary,
)
from zosale.domain.entities import ServiceRecord
from zosale.rules.loader import load_rules
from zosale.rules.models import Rules

logger = logging.getLogger("cli")

COLUMNS = ("id", "employee", "package_name", "vendor", "status", "expires")


def get_service(settings: Settings, rules: Rules) -> ServiceRecordService:
    return ServiceRecordService(
        repo=SQLiteServiceRepo(settings.db_path),
        clock=SystemClock(),
        id_prefix=rules.services.id_prefix,
        max_field_length=rules.services.max_field_length,
        dayfirst=rules.dates.dayfirst,
    )


def print_records(records: tuple[ServiceRecord, ...]) -> None:
    rows = [[str(getattr(r, col)) for col in COLUMNS] for r in records]
    widths = [max([len(col)] + [len(row[i]) for row in rows]) for i, col in enumerate(COLUMNS)]
    print("  ".join(col.ljust(w) for col, w in zip(COLUMNS, widths, strict=True)))
    for row in rows:
        print("  ".join(value.ljust(w) for value, w in zip(row, widths, strict=True)))
    print(f"{len(rows)} service(s)")


def fail(errors: tuple[ServiceValidationError, ...]) -> None:
    for err in errors:
        logger.error("%s: %s", err.code, err.message)
    sys.exit(1)


def spec_from_args(args: argparse.Namespace) -> FilterSpec:
    return FilterSpec.build(
        employee=args.employee or (),
        type=args.type or (),
        vendor=args.vendor or (),
        status=args.status or (),
        package_name=args.package or (),
        ser_number=args.ser_number,
        ref_no=args.ref_no,
        date_from=args.date_from,
        date_to=args.date_to,
        search_query=args.search,
    )


def handle_list(service: ServiceRecordService, args: argparse.Namespace) -> None:
    result = run_list(service)
    if not result.success:
        fail(result.errors)
    print_records(result.services)


def handle_filter(service: ServiceRecordService, args: argparse.Namespace) -> None:
    result = run_filter_list(FilterListInput(spec=spec_from_args(args)), service)
    if not result.success:
        fail(result.errors)
    print_records(result.services)


def handle_summary(service: ServiceRecordService, args: argparse.Namespace) -> None:
    result = run_summary(service)
    if not result.success or result.summary is None:
        fail(result.errors)
        return
    s = result.summary
    print(f"Total: {s.total}  Active: {s.active}  Expiring soon: {s.exp_soon}  Expired: {s.expired}")


def handle_status(service: ServiceRecordService, args: argparse.Namespace) -> None:
    run = run_enable if args.command == "enable" else run_disable
    result = run(ServiceIdInput(service_id=args.service_id), service)
    if not result.success:
        fail(result.errors)
    print(f"Service {args.service_id} {args.command}d.")


def handle_delete(service: ServiceRecordService, args: argparse.Namespace) -> None:
    result = run_delete(ServiceIdInput(service_id=args.service_id), service)
    if not result.success:
        fail(result.errors)
    print(f"Service {args.service_id} deleted.")


def handle_export(service: ServiceRecordService, rules: Rules, args: argparse.Namespace) -> None:
    result = run_filter_list(FilterListInput(spec=spec_from_args(args)), service)
    if not result.success:
        fail(result.errors)

    if args.format == "csv":
        content = generate_csv(result.services)
        default_name = rules.export.csv_filename
    else:
        content = generate_report_html(
            result.services,
            generated_on=SystemClock().now().date(),
            title=rules.export.report_title,
        )
        default_name = rules.export.html_filename

    output = Path(args.output or default_name)
    output.write_text(content, encoding="utf-8")
    print(f"Exported {result.total} service(s) to {output}")


def add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--employee", action="append", help="Accepted employee (repeatable)")
    parser.add_argument("--type", action="append", help="Accepted type (repeatable)")
    parser.add_argument("--vendor", action="append", help="Accepted vendor (repeatable)")
    parser.add_argument("--status", action="append", help="Accepted status (repeatable)")
    parser.add_argument("--package", action="append", help="Accepted package name (repeatable)")
    parser.add_argument("--ser-number", help="Service number contains")
    parser.add_argument("--ref-no", help="Reference number contains")
    parser.add_argument("--date-from", help="Expires on or after")
    parser.add_argument("--date-to", help="Expires on or before")
    parser.add_argument("--search", help="Free-text search")


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="ZoSale service assignment CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("migrate", help="Apply database migrations")
    subparsers.add_parser("list", help="List all services, newest first")
    subparsers.add_parser("summary", help="Count services per status")

    filter_parser = subparsers.add_parser("filter", help="List services matching filters")
    add_filter_arguments(filter_parser)

    for name in ("enable", "disable", "delete"):
        sub = subparsers.add_parser(name, help=f"{name.capitalize()} a service")
        sub.add_argument("service_id")

    export_parser = subparsers.add_parser("export", help="Export filtered services")
    export_parser.add_argument("--format", choices=["csv", "html"], default="csv")
    export_parser.add_argument("--output", help="Output file path")
    add_filter_arguments(export_parser)

    args = parser.parse_args(argv)

    settings = Settings()
    if settings.rules_path.exists():
        try:
            rules = load_rules(settings.rules_path)
        except ValueError as e:
            logger.error("%s", e)
            sys.exit(1)
    else:
        rules = Rules()

    if args.command == "migrate":
        applied = SQLiteMigrator(settings.db_path).run_migrations()
        print(f"Applied {len(applied)} migration(s).")
        return

    service = get_service(settings, rules)

    if args.command == "list":
        handle_list(service, args)
    elif args.command == "summary":
        handle_summary(service, args)
    elif args.command == "filter":
        handle_filter(service, args)
    elif args.command in ("enable", "disable"):
        handle_status(service, args)
    elif args.command == "delete":
        handle_delete(service, args)
    elif args.command == "export":
        handle_export(service, rules, args)


if __name__ == "__main__":
    main()
