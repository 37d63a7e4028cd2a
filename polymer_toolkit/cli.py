#!/usr/bin/env python3
"""
Command-line interface for the Polymer Prove API.

Examples:
  - Request a proof from transaction coordinates
    polymer-cli request --chain-id 1 --block-number 17000000 --tx-index 5 --log-index 2

  - Request a proof from a transaction hash
    polymer-cli request --tx-hash 0x123... --rpc-url https://... --log-index 1
    polymer-cli request --tx-hash 0x123... --rpc-url https://... \\
        --event-signature "Transfer(address,address,uint256)" --wait

  - Check a job
    polymer-cli status 12345

The API key is read from --api-key, POLYMER_API_KEY or the config file
(~/.polymer-cli.env by default).
"""

import argparse
from typing import List, Optional

from rich.markup import escape

from polymer_toolkit import __version__
from polymer_toolkit.chain.resolver import resolve_transaction
from polymer_toolkit.commands.helpers import handle_command_error
from polymer_toolkit.commands.validation import (
    parse_optional_uint,
    parse_uint,
    validate_rpc_url,
)
from polymer_toolkit.proofs.client import ProofServiceClient
from polymer_toolkit.shared.config import ProofConfig, load_config
from polymer_toolkit.shared.exceptions import ValidationError
from polymer_toolkit.shared.logging import configure_logging
from polymer_toolkit.shared.types import TransactionCoordinates
from polymer_toolkit.utils.formatters import console, print_line, print_proof


def _load_validated_config(args: argparse.Namespace) -> ProofConfig:
    config = load_config(
        config_file=args.config,
        overrides={
            "api_key": args.api_key,
            "api_url": args.api_url,
            "debug": True if args.debug else None,
            "max_attempts": args.max_attempts,
            "poll_interval_ms": args.interval,
        },
    )
    config.validate()
    configure_logging(config.debug)
    return config


def _coordinates_from_args(args: argparse.Namespace) -> TransactionCoordinates:
    """Coordinates given directly on the command line."""
    if not all((args.chain_id, args.block_number, args.tx_index, args.log_index)):
        raise ValidationError(
            "chain-id, block-number, tx-index, and log-index are required"
        )
    return TransactionCoordinates(
        chain_id=parse_uint(args.chain_id, "chain ID"),
        block_number=parse_uint(args.block_number, "block number"),
        tx_index=parse_uint(args.tx_index, "transaction index", bits=32),
        log_index=parse_uint(args.log_index, "log index", bits=32),
    )


def _coordinates_from_hash(
    args: argparse.Namespace, config: ProofConfig
) -> TransactionCoordinates:
    """Coordinates looked up from a transaction hash on the source chain."""
    rpc_url = validate_rpc_url(args.rpc_url)
    if config.debug:
        console.print(f"Connecting to RPC endpoint: {escape(rpc_url)}")
        console.print(f"Fetching transaction: {escape(args.tx_hash)}")

    coordinates = resolve_transaction(
        args.tx_hash,
        rpc_url,
        log_index=parse_optional_uint(args.log_index, "log index", bits=32),
        event_signature=args.event_signature,
        chain_id=parse_optional_uint(args.chain_id, "chain ID"),
    )

    if config.debug:
        console.print("Transaction details:")
        console.print(f"  Chain ID: {coordinates.chain_id}")
        console.print(f"  Block Number: {coordinates.block_number}")
        console.print(f"  Transaction Index: {coordinates.tx_index}")
        console.print(f"  Log Index: {coordinates.log_index}")
    return coordinates


def _wait_and_display_proof(
    client: ProofServiceClient,
    job_id: str,
    config: ProofConfig,
    raw: bool,
) -> None:
    if config.debug:
        console.print(
            f"Waiting for proof to be generated (max {config.max_attempts} "
            f"attempts, {config.poll_interval_ms}ms interval)..."
        )

    status = client.wait_for_proof(
        job_id, config.max_attempts, config.poll_interval
    )

    if config.debug:
        console.print("Proof generated successfully!")

    # Non-debug output is always raw
    print_proof(status.proof, raw=not config.debug or raw)


def cmd_request(args: argparse.Namespace) -> None:
    config = _load_validated_config(args)

    if args.tx_hash:
        coordinates = _coordinates_from_hash(args, config)
    else:
        coordinates = _coordinates_from_args(args)

    with ProofServiceClient.from_config(config) as client:
        if config.debug:
            console.print("Requesting proof...")
        job_id = client.request_proof_for(coordinates)

        if config.debug:
            console.print("Proof request submitted successfully")
            console.print(f"Job ID: {escape(job_id)}")
        elif not args.wait:
            print_line(job_id)

        if args.wait:
            _wait_and_display_proof(client, job_id, config, args.raw)


def cmd_status(args: argparse.Namespace) -> None:
    config = _load_validated_config(args)

    with ProofServiceClient.from_config(config) as client:
        if config.debug:
            console.print(
                f"Checking status for job ID: {escape(args.job_id)}..."
            )
        status = client.get_status(args.job_id)

    has_proof = status.is_completed and status.proof is not None

    if not config.debug:
        print_line(status.status)
        if has_proof:
            print_proof(status.proof, raw=True)
        return

    console.print(f"Status: {escape(status.status)}")
    if status.error:
        console.print(f"Error: {escape(status.error)}")
    if has_proof:
        console.print("Proof is ready!")
        print_proof(status.proof, raw=args.raw)


def cmd_version(args: argparse.Namespace) -> None:
    print_line(f"polymer-cli v{__version__}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polymer-cli",
        description="A CLI tool for interacting with the Polymer Prove API",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Config file (default is $HOME/.polymer-cli.env)",
    )
    parser.add_argument("--api-key", type=str, help="Polymer API key")
    parser.add_argument("--api-url", type=str, help="Polymer API URL")
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--max-attempts", type=int, help="Maximum polling attempts"
    )
    parser.add_argument(
        "--interval", type=int, help="Polling interval in milliseconds"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # request
    p_req = sub.add_parser("request", help="Request a new proof")
    p_req.add_argument("--chain-id", type=str, help="Source chain ID")
    p_req.add_argument("--block-number", type=str, help="Source block number")
    p_req.add_argument(
        "--tx-index", type=str, help="Transaction index in the block"
    )
    p_req.add_argument(
        "--log-index", type=str, help="Log index in the transaction"
    )
    p_req.add_argument(
        "--tx-hash", type=str, help="Transaction hash to request proof for"
    )
    p_req.add_argument(
        "--rpc-url", type=str, help="RPC URL for the source chain"
    )
    p_req.add_argument(
        "--event-signature",
        type=str,
        help="Event signature to identify the log (e.g. 'Transfer(address,address,uint256)')",
    )
    p_req.add_argument(
        "--wait",
        action="store_true",
        help="Wait for the proof to be generated",
    )
    p_req.add_argument(
        "--raw", action="store_true", help="Return raw JSON output"
    )
    p_req.set_defaults(func=cmd_request)

    # status
    p_status = sub.add_parser(
        "status", help="Check the status of a proof generation job"
    )
    p_status.add_argument("job_id", type=str, help="Job ID returned by request")
    p_status.add_argument(
        "--raw", action="store_true", help="Return raw JSON output"
    )
    p_status.set_defaults(func=cmd_status)

    # version
    p_version = sub.add_parser("version", help="Print the version number")
    p_version.set_defaults(func=cmd_version)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except Exception as e:
        handle_command_error(e)


if __name__ == "__main__":
    main()
