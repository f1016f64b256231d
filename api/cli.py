# api/cli.py
"""
Usage:
  python -m api.cli resolve vitalik.eth:btc --network mainnet
  python -m api.cli info vitalik.eth
  python -m api.cli reverse 0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045 --debug
Notes:
  - domain 支持 name.eth:<chain> 与 name.<chain> 两种写法
  - RPC 从 .env (RPC_URL__{NETWORK}) 或 configs/networks.yaml 读取
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from dotenv import load_dotenv

from core.errors import FormatError, UnsupportedNetwork
from core.logger import enable_debug
from core.resolver import ENSResolver

EXIT_NOT_FOUND = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ENS multi-chain resolver CLI")
    parser.add_argument("--network", default=None, help="Network name, e.g. mainnet / sepolia (default: $DEFAULT_NETWORK)")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging")

    # 子命令后也可传 --network / --debug；SUPPRESS 避免覆盖顶层已解析的值
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--network", default=argparse.SUPPRESS, help="Network name, e.g. mainnet / sepolia")
    common.add_argument("--debug", action="store_true", default=argparse.SUPPRESS, help="Enable DEBUG logging")

    sub = parser.add_subparsers(dest="command", required=True)
    p = sub.add_parser("resolve", parents=[common], help="Resolve name (name.eth, name.eth:btc, name.btc, name.twitter)")
    p.add_argument("domain")
    p = sub.add_parser("info", parents=[common], help="Show resolver / owner / address of a name")
    p.add_argument("domain")
    p = sub.add_parser("reverse", parents=[common], help="Reverse resolve an 0x address to its primary name")
    p.add_argument("address")
    return parser


def main(argv: Optional[List[str]] = None, resolver: Optional[ENSResolver] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    if args.debug:
        enable_debug()
    resolver = resolver or ENSResolver()

    try:
        if args.command == "resolve":
            result = resolver.resolve(args.domain, args.network)
        elif args.command == "info":
            info = resolver.domain_info(args.domain, args.network)
            result = json.dumps(info.to_dict(), indent=2) if info else None
        else:
            result = resolver.reverse_resolve(args.address, args.network)
    except (FormatError, UnsupportedNetwork) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if not result:
        print("not found")
        return EXIT_NOT_FOUND
    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
