#!/usr/bin/env python3
"""
Security Audit Engine - posture scoring and traffic anomaly detection

Scores a collected system snapshot and scans traffic samples for attack
patterns, then writes a Markdown or JSON report.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from security_audit import __version__
from security_audit.engine import detect_traffic_anomalies, run_security_analysis
from security_audit.reporting import ReportGenerator, get_exporter
from security_audit.snapshot import load_snapshot, load_traffic_samples
from security_audit.utils import load_config, setup_logger

DEFAULT_CONFIG = "config.yaml"


# ---------------- ARGUMENT PARSING ---------------- #

def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Security Audit Engine - posture scoring and traffic anomaly detection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s audit snapshot.json
  %(prog)s audit snapshot.yaml --format json --output audit.json
  %(prog)s traffic samples.json -v --config custom_config.yaml
        """,
    )

    # Shared by both subcommands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-o", "--output", help="Output file path (default: output/<command>_<id>.<format>)"
    )
    common.add_argument(
        "-f",
        "--format",
        choices=["markdown", "md", "json"],
        default="markdown",
        help="Output format (default: markdown)",
    )
    common.add_argument(
        "-c",
        "--config",
        default=os.getenv("SECURITY_AUDIT_CONFIG", DEFAULT_CONFIG),
        help="Configuration file path (env: SECURITY_AUDIT_CONFIG)",
    )
    common.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    audit_parser = subparsers.add_parser(
        "audit", parents=[common], help="Score a system snapshot and generate a report"
    )
    audit_parser.add_argument("snapshot_file", help="Snapshot file (JSON or YAML)")

    traffic_parser = subparsers.add_parser(
        "traffic", parents=[common], help="Detect anomalies in traffic samples"
    )
    traffic_parser.add_argument("samples_file", help="Traffic samples file (JSON or YAML)")

    parser.add_argument("--version", action="version", version=f"Security Audit Engine {__version__}")

    return parser.parse_args(argv)


def configure(args: argparse.Namespace) -> dict:
    """Load configuration and set up logging. A missing config file means defaults."""
    config_path = Path(args.config)
    config = load_config(str(config_path)) if config_path.exists() else {}

    log_config = config.get("logging") or {}
    level = os.getenv("SECURITY_AUDIT_LOG_LEVEL") or log_config.get("level", "INFO")
    if args.verbose:
        level = "DEBUG"

    setup_logger(level=level, log_file=log_config.get("file"))
    return config


def export_report(report_data, args: argparse.Namespace, config: dict, stem: str) -> str:
    """Write the report in the requested format and return its path."""
    output_format = args.format.lower()
    if output_format == "md":
        output_format = "markdown"

    if args.output:
        output_path = args.output
    else:
        ext = "md" if output_format == "markdown" else output_format
        output_path = f"output/{stem}_{report_data.report_id}.{ext}"

    template_dir = (config.get("reporting") or {}).get("template_dir")
    exporter = get_exporter(output_format, template_dir=template_dir)
    return exporter.export(report_data, output_path)


# ---------------- COMMANDS ---------------- #

def run_audit(args: argparse.Namespace, config: dict) -> int:
    snapshot = load_snapshot(Path(args.snapshot_file).expanduser())
    target = snapshot.host.hostname or snapshot.host.ip or Path(args.snapshot_file).stem

    print(f"[*] Auditing {target}...")
    result = run_security_analysis(snapshot, config)

    report_data = ReportGenerator(config).generate(result=result, target=target)
    exported_path = export_report(report_data, args, config, "audit")

    print("\n" + "=" * 60)
    print("  Audit Complete")
    print("=" * 60)
    print(f"\n  Overall Score: {result.scores.overall}/100")
    print(f"  Total Findings: {len(result.findings)}")
    print(f"    - Critical: {result.critical_count}")
    print(f"    - High: {result.high_count}")
    print(f"    - Medium: {result.medium_count}")
    print(f"    - Low: {result.low_count}")
    print(f"\n  {result.summary}")
    print(f"\n  Report saved to: {exported_path}\n")
    return 0


def run_traffic(args: argparse.Namespace, config: dict) -> int:
    samples_path = Path(args.samples_file).expanduser()
    samples = load_traffic_samples(samples_path)

    print(f"[*] Scanning {len(samples)} traffic samples...")
    anomalies = detect_traffic_anomalies(samples, config)

    report_data = ReportGenerator(config).generate(anomalies=anomalies, target=samples_path.name)
    exported_path = export_report(report_data, args, config, "traffic")

    print("\n" + "=" * 60)
    print("  Traffic Scan Complete")
    print("=" * 60)
    print(f"\n  Anomalies: {len(anomalies)}")
    for anomaly in anomalies:
        print(f"    - [{anomaly.severity.value.upper()}] {anomaly.type}")
    print(f"\n  Report saved to: {exported_path}\n")
    return 0


# ---------------- MAIN ---------------- #

def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    if not args.command:
        print("Error: No command specified. Use --help for usage information.")
        return 1

    try:
        config = configure(args)
        if args.command == "audit":
            return run_audit(args, config)
        return run_traffic(args, config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
