"""
Run the image optimizer service.

    python -m image_optimizer -o ./cache -p 8080 -s example.com,cdn.example.org
"""

import argparse
import logging

import uvicorn

from .core.config import Settings
from .main import create_app

logger = logging.getLogger("image_optimizer")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="On-demand image transform proxy")
    parser.add_argument("-o", dest="output_directory", help="Output directory for compressed images")
    parser.add_argument("-p", dest="port", type=int, help="Port for the server to listen on")
    parser.add_argument("-s", dest="allowed_domains", help="Allowed domains separated by comma (,)")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.output_directory is not None:
        overrides["OUTPUT_DIRECTORY"] = args.output_directory
    if args.port is not None:
        overrides["PORT"] = args.port
    if args.allowed_domains is not None:
        overrides["ALLOWED_DOMAINS"] = args.allowed_domains
    return Settings(**overrides)


def main(argv=None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = build_settings(parse_args(argv))
    app = create_app(settings)

    logger.info("------------------------------------")
    logger.info("Image Optimizer Service")
    logger.info("Server is running on port: %d", settings.PORT)
    logger.info("Allowed Domains: %s", settings.ALLOWED_DOMAINS)
    logger.info("Output Directory: %s", settings.OUTPUT_DIRECTORY)
    logger.info("------------------------------------")

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
