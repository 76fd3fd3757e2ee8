import argparse
import os

from mockrest import create_app
from mockrest.config import DevConfig, parse_socket_address

app = create_app(DevConfig)


def socket_address(value: str):
    try:
        return parse_socket_address(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="In-memory mock REST data server")
    parser.add_argument(
        "-s", "--socket-address",
        type=socket_address,
        default=app.config["SOCKET_ADDRESS"],
        help="host:port to bind (default: %(default)s)",
    )
    parser.add_argument("--debug", action="store_true", help="Run Flask in debug mode")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    host, port = args.socket_address
    debug = args.debug or os.getenv("DEBUG", "false").strip().lower() in {"1", "true", "yes", "on"}
    app.logger.info("Serving mock REST data on %s:%s", host, port)
    # reloader would fork a second process with its own empty store
    app.run(host=host, port=port, debug=debug, use_reloader=False, threaded=True)


if __name__ == "__main__":
    main()
