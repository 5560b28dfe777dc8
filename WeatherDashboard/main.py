"""Run the weather dashboard web server."""
import argparse
import logging
import sys
from typing import List, Optional

from app import create_app
from config import ConfigurationError, load_config
from proxy_client import HttpProxyClient


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Weather dashboard server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--proxy-url", default=None,
                        help="Fetch weather from a remote proxy instead of the built-in one")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--debug", action="store_true", help="Run Flask in debug mode")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    # urllib3 logs full request URLs at DEBUG, and those carry the API key
    logging.getLogger("urllib3").setLevel(logging.INFO)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    try:
        config = load_config()
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc

    if not config.has_api_key:
        logging.error("OPENWEATHER_API_KEY is not set; /api/weather will answer 500 until it is")

    client = None
    if args.proxy_url:
        client = HttpProxyClient(args.proxy_url, timeout=config.timeout)
        logging.info("Dashboard will use remote proxy at %s", args.proxy_url)

    app = create_app(config, client=client)
    logging.info("Serving on http://%s:%s", args.host, args.port)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
