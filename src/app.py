"""Command-line entry point for the dmgate admission filter."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Iterator, Optional

from art import tprint

import settings
from adapters.dry_run_agent import DryRunAgent
from adapters.json_config import JsonConfigSource
from core.admin_policy import AdminPolicyCache
from core.engine import AdmissionEngine, mention_patterns
from core.gateway import DirectMessageGate
from core.models import InboundMessage
from core.patterns import compile_patterns

NAME = "DMGATE"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging(verbose: bool = False) -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False) and not verbose:
        return

    level_name = "DEBUG" if verbose else str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True) or verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    # Operator-visible, append-only filter log.
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/dmgate.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        file_handler = RotatingFileHandler(
            path,
            maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
            backupCount=int(file_cfg.get("backup_count", 5)),
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _build_engine() -> AdmissionEngine:
    return AdmissionEngine(
        config_source=JsonConfigSource(settings.GATEWAY_CONFIG_PATH),
        policy_cache=AdminPolicyCache(settings.ADMIN_CONFIG_PATH),
        filter_config=settings.build_filter_config(),
    )


def _message_from_record(record: dict) -> InboundMessage:
    return InboundMessage(
        sender_id=str(record.get("sender", record.get("from", ""))),
        body=str(record.get("body", "")),
        chat_type=str(record.get("chat_type", "direct")),
        sender_e164=record.get("sender_e164"),
        message_id=record.get("id"),
    )


def _read_messages(path: str) -> Iterator[InboundMessage]:
    logger = logging.getLogger(__name__)
    with open(path, "r", encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except ValueError:
                logger.warning("Skipping line %s: not valid JSON", line_no)
                continue
            if not isinstance(record, dict):
                logger.warning("Skipping line %s: expected a JSON object", line_no)
                continue
            yield _message_from_record(record)


def _check(sender: str, body: str, group: bool) -> None:
    gate = DirectMessageGate(_build_engine(), DryRunAgent())
    message = InboundMessage(sender_id=sender, body=body, chat_type="group" if group else "direct")
    decision = gate.admit(message)
    line = f"{decision.verdict.value.upper()}: {decision.reason.value}"
    if decision.matched_pattern:
        line += f" ({decision.matched_pattern})"
    print(line)


def _replay(path: str) -> None:
    if not os.path.exists(path):
        raise SystemExit(f"Replay file not found: {path}")

    engine = _build_engine()
    agent = DryRunAgent()
    gate = DirectMessageGate(engine, agent)

    async def _run_replay() -> int:
        total = 0
        for message in _read_messages(path):
            total += 1
            await gate.handle(message)
        return total

    total = asyncio.run(_run_replay())
    print(f"Messages replayed: {total}")
    print(f"Reached the agent: {len(agent.dispatched)}")
    print(engine.counters.summary())


def _status() -> None:
    print(f"Gateway config: {settings.GATEWAY_CONFIG_PATH}")
    patterns = mention_patterns(JsonConfigSource(settings.GATEWAY_CONFIG_PATH).load())
    if not patterns:
        print("Keyword patterns: none (filter inactive, all DMs allowed)")
    else:
        compiled = compile_patterns(patterns)
        print(f"Keyword patterns: {len(patterns)} configured, {len(patterns) - len(compiled)} invalid")

    print(f"Admin policy: {settings.ADMIN_CONFIG_PATH}")
    policy = AdminPolicyCache(settings.ADMIN_CONFIG_PATH).current()
    if policy is None:
        print("  not available")
        return
    passwordless = [
        user
        for user in policy.god_mode.super_users
        if user.platform == settings.PLATFORM and not user.password_required
    ]
    bypass_rules = [
        rule
        for rule in policy.rules
        if rule.enabled and rule.trigger_type != "lead" and rule.no_keyword_restrictions
    ]
    print(f"  God Mode enabled: {policy.god_mode.enabled}")
    print(f"  Passwordless super-users: {len(passwordless)}")
    print(f"  Rules without keyword restrictions: {len(bypass_rules)}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="dmgate")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every filter decision")
    subparsers = parser.add_subparsers(dest="command")

    check = subparsers.add_parser("check", help="Evaluate a single message")
    check.add_argument("--sender", required=True, help="Sender identifier, e.g. 972501234567@s.whatsapp.net")
    check.add_argument("--body", required=True, help="Message text")
    check.add_argument("--group", action="store_true", help="Treat the message as a group message")

    replay = subparsers.add_parser("replay", help="Run a JSONL file of messages through the filter")
    replay.add_argument("path", help="One JSON object per line: sender, body, chat_type")

    subparsers.add_parser("status", help="Show filter configuration status")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "check":
        _check(args.sender, args.body, args.group)
        return
    if args.command == "replay":
        _print_banner()
        _replay(args.path)
        return
    if args.command == "status":
        _print_banner()
        _status()
        return
    parser.print_help()


if __name__ == "__main__":
    main()
