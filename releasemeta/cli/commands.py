# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the releasemeta CLI.

Each handler takes the parsed argparse namespace and returns an exit code
from releasemeta.cli.exit_codes. Results are reported through the
structured logger; the only thing written to stdout directly is the body
produced by `embed` when no --output is given.
"""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any, Optional

from releasemeta.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
    verification_exit_code,
)
from releasemeta.config.exceptions import ConfigError
from releasemeta.config.loader import load_config
from releasemeta.config.schema import ReleaseMetaConfig
from releasemeta.logging.logger import get_logger, set_package_log_level
from releasemeta.release.decoder import decode_release
from releasemeta.release.errors import PayloadMalformed, RecordMalformed
from releasemeta.release.models import CompatibilityDescriptor, Release
from releasemeta.release.payload import embed_payload, parse_payload
from releasemeta.utils.hashing import DEFAULT_HASH_ALGORITHM, compute_file_digest
from releasemeta.verification.environment import EnvironmentInfo
from releasemeta.verification.resources import FileSystemResourceReader
from releasemeta.verification.verifier import verify


def _load_and_configure(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, Optional[ReleaseMetaConfig], logging.Logger]:
    """
    Shared setup: load the optional config file and apply the log level.

    --log-level wins over global.log_level. Returns (exit_code, config, logger);
    callers return early when exit_code is not SUCCESS.
    """
    log_level = args.log_level or "INFO"
    logger_name = f"releasemeta.cli.{command_name}"

    config = None
    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger = get_logger(logger_name, log_level=log_level)
            logger.error(
                "Configuration error",
                extra={
                    "command": command_name,
                    "config": str(err.path),
                    "problems": list(getattr(err, "problems", ())),
                    "error": str(err),
                },
            )
            return CONFIG_ERROR, None, logger

        if args.log_level is None:
            log_level = config.global_config.log_level

    log_file = None
    if config is not None and config.global_config.log_file is not None:
        log_file = Path(config.global_config.log_file)

    logger = get_logger(logger_name, log_level=log_level, log_file=log_file)
    set_package_log_level(log_level)
    return SUCCESS, config, logger


def _read_record(path: Path) -> Any:
    """Load a release record JSON file. Shape checks are left to the decoder."""
    return json.loads(path.read_text(encoding="utf-8"))


def _descriptor_summary(descriptor: Optional[CompatibilityDescriptor]) -> Optional[dict[str, object]]:
    if descriptor is None:
        return None
    return {
        "primary_version": descriptor.primary_version,
        "compatible_versions": list(descriptor.compatible_versions),
        "loader": descriptor.loader,
        "announcement_post": descriptor.announcement_post,
        "file_checks": [
            {
                "anchor": check.anchor,
                "path": check.path,
                "acceptable_hashes": sorted(check.acceptable_hashes),
            }
            for check in descriptor.file_checks
        ],
    }


def _release_summary(release: Release) -> dict[str, object]:
    return {
        "tag": release.tag,
        "title": release.title,
        "url": release.url,
        "published_at": release.published_at,
        "prerelease": release.prerelease,
        "body_length": len(release.body),
        "compatibility": _descriptor_summary(release.compatibility),
    }


def handle_decode(args: argparse.Namespace) -> int:
    """Decode one release record and log what was found."""
    exit_code, _, logger = _load_and_configure(args, "decode")
    if exit_code != SUCCESS:
        return exit_code

    record_path = Path(args.record)
    try:
        raw = _read_record(record_path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as err:
        logger.error("Cannot read release record", extra={"path": str(record_path), "error": str(err)})
        return USER_ERROR

    try:
        decoded = decode_release(raw)
    except RecordMalformed as err:
        logger.error(
            "Release record is malformed",
            extra={"path": str(record_path), "fields": list(err.fields), "error": str(err)},
        )
        return VALIDATION_ERROR
    except Exception as err:
        logger.error("Decode failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    logger.info("Release decoded", extra=_release_summary(decoded.release))
    if decoded.payload_error is not None:
        logger.warning(
            "Release has a malformed hidden payload",
            extra={"tag": decoded.release.tag, "error": str(decoded.payload_error)},
        )
    return SUCCESS


def _resolve_environment(
    args: argparse.Namespace, config: Optional[ReleaseMetaConfig]
) -> Optional[EnvironmentInfo]:
    version = args.env_version
    loader = args.env_loader
    if config is not None and config.environment is not None:
        version = version or config.environment.version
        loader = loader or config.environment.loader
    if version is None or loader is None:
        return None
    return EnvironmentInfo(version=version, loader=loader)


def handle_verify(args: argparse.Namespace) -> int:
    """Decode a release record, then check the host and installed files against it."""
    exit_code, config, logger = _load_and_configure(args, "verify")
    if exit_code != SUCCESS:
        return exit_code

    env = _resolve_environment(args, config)
    if env is None:
        logger.error(
            "Host version and loader are required",
            extra={"hint": "pass --game-version and --loader, or set environment: in the config"},
        )
        return USER_ERROR

    verify_config = config.verify if config is not None else None
    algorithm = args.algorithm or (
        verify_config.hash_algorithm if verify_config else DEFAULT_HASH_ALGORITHM
    )
    max_workers = args.max_workers
    if max_workers is None:
        max_workers = verify_config.max_workers if verify_config else 1
    resource_root = Path(
        args.resource_root or (verify_config.resource_root if verify_config else ".")
    )

    record_path = Path(args.record)
    try:
        raw = _read_record(record_path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as err:
        logger.error("Cannot read release record", extra={"path": str(record_path), "error": str(err)})
        return USER_ERROR

    try:
        decoded = decode_release(raw)
    except RecordMalformed as err:
        logger.error(
            "Release record is malformed",
            extra={"path": str(record_path), "fields": list(err.fields), "error": str(err)},
        )
        return VALIDATION_ERROR

    descriptor = decoded.release.compatibility
    if descriptor is None:
        logger.error(
            "Release carries no usable compatibility descriptor",
            extra={
                "tag": decoded.release.tag,
                "payload_error": str(decoded.payload_error) if decoded.payload_error else None,
            },
        )
        return VALIDATION_ERROR

    if not resource_root.is_dir():
        logger.error("Resource root is not a directory", extra={"path": str(resource_root)})
        return USER_ERROR

    try:
        result = verify(
            descriptor,
            env,
            FileSystemResourceReader(resource_root),
            algorithm=algorithm,
            max_workers=max_workers,
        )
    except ValueError as err:
        logger.error("Invalid verification settings", extra={"error": str(err)})
        return USER_ERROR
    except Exception as err:
        logger.error("Verification failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    logger.info(
        "Verification complete",
        extra={
            "tag": decoded.release.tag,
            "compatible": result.compatible,
            "version_ok": result.version_ok,
            "loader_ok": result.loader_ok,
            "files": [
                {"anchor": f.anchor, "path": f.path, "outcome": f.outcome.value}
                for f in result.files
            ],
        },
    )
    return verification_exit_code(result)


def handle_embed(args: argparse.Namespace) -> int:
    """Write a changelog body with the descriptor hidden at its start."""
    exit_code, _, logger = _load_and_configure(args, "embed")
    if exit_code != SUCCESS:
        return exit_code

    try:
        descriptor_text = Path(args.descriptor).read_text(encoding="utf-8")
        body = Path(args.body).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        logger.error("Cannot read input file", extra={"error": str(err)})
        return USER_ERROR

    try:
        descriptor = parse_payload(descriptor_text)
    except PayloadMalformed as err:
        logger.error("Descriptor is not a valid payload", extra={"error": str(err)})
        return VALIDATION_ERROR

    embedded = embed_payload(descriptor, body)

    if args.output is None:
        sys.stdout.write(embedded)
        sys.stdout.flush()
        return SUCCESS

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(embedded, encoding="utf-8")
    logger.info(
        "Payload embedded",
        extra={"output": str(output_path), "file_checks": len(descriptor.file_checks)},
    )
    return SUCCESS


def handle_hash(args: argparse.Namespace) -> int:
    """Log the uppercase digest of each file."""
    exit_code, config, logger = _load_and_configure(args, "hash")
    if exit_code != SUCCESS:
        return exit_code

    algorithm = args.algorithm or (
        config.verify.hash_algorithm if config is not None else DEFAULT_HASH_ALGORITHM
    )

    status = SUCCESS
    for name in args.files:
        file_path = Path(name)
        try:
            digest = compute_file_digest(file_path, algorithm)
        except ValueError as err:
            logger.error("Invalid hash algorithm", extra={"error": str(err)})
            return USER_ERROR
        except OSError as err:
            logger.error("Cannot hash file", extra={"file": name, "error": str(err)})
            status = USER_ERROR
            continue

        logger.info(
            "File digest",
            extra={"file": name, "algorithm": algorithm, "digest": digest},
        )

    return status


def handle_info(args: argparse.Namespace) -> int:
    """Display package and environment information."""
    exit_code, _, logger = _load_and_configure(args, "info")
    if exit_code != SUCCESS:
        return exit_code

    from releasemeta import __version__

    logger.info(
        "System information",
        extra={
            "releasemeta_version": __version__,
            "python_version": platform.python_version(),
            "platform": platform.system(),
            "architecture": platform.machine(),
            "config": args.config,
        },
    )
    return SUCCESS
