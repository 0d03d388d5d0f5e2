from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from typing import Any, Dict

from shiftgen.data.sources import InMemoryStore
from shiftgen.errors import ShiftgenError
from shiftgen.io.csv_loader import (
    load_locations,
    load_shifts,
    load_staff,
    load_templates,
    save_shifts,
)
from shiftgen.io.excel_export import export_preview_to_excel
from shiftgen.models.config import GenerationConfig
from shiftgen.models.rules import RULES
from shiftgen.models.validated import GenerateShiftsRequest
from shiftgen.services.shift_service import ShiftService
from shiftgen.utils.logging_setup import setup_logging


def _load_config(args: argparse.Namespace) -> GenerationConfig:
    """Settings from --config, then -v and --log-file on top."""
    settings: Dict[str, Any] = {"log_level": "WARNING", "log_file": None}
    if args.config:
        with open(args.config, encoding="utf-8") as f:
            settings.update(json.load(f))
    if args.verbose:
        settings["log_level"] = "INFO" if args.verbose == 1 else "DEBUG"
    if args.log_file:
        settings["log_file"] = args.log_file
    return GenerationConfig.from_dict(settings)


def _build_store(args: argparse.Namespace) -> InMemoryStore:
    return InMemoryStore(
        locations=load_locations(args.locations) if args.locations else (),
        staff=load_staff(args.staff) if args.staff else (),
        templates=load_templates(args.templates),
        shifts=load_shifts(args.shifts) if getattr(args, "shifts", None) else (),
    )


def _cmd_masters(service: ShiftService, args: argparse.Namespace) -> int:
    masters = service.template_masters()
    if args.json_out:
        print(json.dumps([asdict(m) for m in masters], ensure_ascii=False, indent=2))
    else:
        print("Template sets:")
        for m in masters:
            label = m.location_name or m.location_id
            print(f" - {label} v{m.version}")
    return 0


def _cmd_preview(service: ShiftService, args: argparse.Namespace) -> int:
    request = GenerateShiftsRequest.parse(
        location_id=args.location,
        version=args.version,
        start_date=args.start,
        weeks=args.weeks if args.weeks is not None else service.config.weeks,
    )
    preview = service.generate_preview(request)

    if args.excel:
        export_preview_to_excel(preview, args.excel)
    if args.output:
        created = service.create_shifts(preview.rows)
        save_shifts(service.store.shifts, args.output)
        print(f"Saved {len(created)} new shifts to {args.output}", file=sys.stderr)

    if args.json_out:
        payload: Dict[str, Any] = {
            "summary": preview.summary(),
            "shifts": preview.to_dataframe().to_dict("records"),
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print("Summary:")
        for k, v in preview.summary().items():
            print(f" - {k}: {v}")
        print(preview.to_dataframe().to_string(index=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Generate dated shifts from weekly templates")
    p.add_argument("--templates", required=True, help="Shift templates CSV")
    p.add_argument("--locations", help="Locations CSV (id,name)")
    p.add_argument("--staff", help="Staff CSV (id,first_name,last_name,role)")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--log-file", default=None, help="Also log to this file")
    p.add_argument("--config", help="JSON file with generation settings (weeks, cache, logging)")
    sub = p.add_subparsers(dest="command", required=True)

    pm = sub.add_parser("masters", help="List template sets")
    pm.add_argument("--json", dest="json_out", action="store_true")

    pp = sub.add_parser("preview", help="Expand a template set and flag conflicts")
    pp.add_argument("--location", required=True, help="Location id of the template set")
    pp.add_argument("--version", type=int, required=True, help="Template set version")
    pp.add_argument("--start", required=True, help="Start date (YYYY-MM-DD)")
    pp.add_argument("--weeks", type=int, default=None,
                    help=f"Number of weeks, 1-{RULES.max_weeks} (default from config)")
    pp.add_argument("--shifts", help="Existing shifts CSV to check for conflicts")
    pp.add_argument("--excel", help="Write the preview to this .xlsx file")
    pp.add_argument("--output", help="Confirm: insert the shifts and write all shifts to this CSV")
    pp.add_argument("--json", dest="json_out", action="store_true", help="JSON output")
    args = p.parse_args(argv)

    try:
        config = _load_config(args)
        setup_logging(level=config.log_level, log_file=config.log_file)
        service = ShiftService(_build_store(args), config=config)
        if args.command == "masters":
            return _cmd_masters(service, args)
        return _cmd_preview(service, args)
    except (ShiftgenError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
