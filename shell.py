import argparse
import logging
import os
import sys

from kv_shell.shell import Shell
from logkv import Store, StoreError

logger = logging.getLogger()


def format_value(value: bytes) -> str:
    if not value:
        return '""'
    return value.decode("utf-8", errors="backslashreplace")


def register_commands(shell: Shell, store: Store) -> None:

    @shell.command("get", arity=1, usage="get <key>")
    def get(key: str) -> str:
        return format_value(store.get(key.encode("utf-8")))

    @shell.command("set", arity=2, usage="set <key> <value>", aliases=["insert"])
    def set_(key: str, value: str) -> str:
        store.insert(key.encode("utf-8"), value.encode("utf-8"))
        return "OK"

    @shell.command("del", arity=1, usage="del <key>", aliases=["delete"])
    def delete(key: str) -> str:
        store.delete(key.encode("utf-8"))
        return "OK"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive shell for a logkv store")
    parser.add_argument("path", help="path to the log file (created if missing)")
    parser.add_argument(
        "--sync", action="store_true", help="fsync the log after every write"
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        help="logging level (default: $LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        store = Store.open(args.path, sync_writes=args.sync)
    except StoreError as e:
        logger.error(f"Cannot open store: {e}")
        return 1

    with store:
        shell = Shell()
        register_commands(shell, store)
        logger.debug(f"Registered commands: {sorted(shell.commands)}")
        shell.run()

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass
