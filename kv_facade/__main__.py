import argparse
import os

import uvicorn

from kv_facade.config import ENV_VARS, load_settings
from kv_facade.main import configure_logging, create_app


def main(argv=None) -> None:
    example_usage = """
    Example usage:

    Serve the key viewer on the default port with settings from the environment:
    $ kv-facade

    Use a configuration file and override the port:
    $ kv-facade --config ./configs/kv_facade.example.yaml --port 8080

    Serve the plain variant (welcome text, set/get only):
    $ kv-facade -v plain
    """
    parser = argparse.ArgumentParser(
        description="Serve the kv_facade HTTP API.",
        epilog=example_usage,
        formatter_class=argparse.RawDescriptionHelpFormatter)

    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to a YAML settings file. Defaults to $KVFACADE_CONFIG.",
    )
    parser.add_argument(
        "--host",
        type=str,
        help="Interface to bind. Defaults to $HOST or 0.0.0.0.",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        help="Port to listen on. Defaults to $PORT or 3000.",
    )
    parser.add_argument(
        "--variant",
        "-v",
        choices=["viewer", "plain"],
        help="Route set to expose. Default is 'viewer'.",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server on code changes (development only).",
    )
    args = parser.parse_args(argv)

    settings = load_settings(args.config, host=args.host, port=args.port, variant=args.variant)

    configure_logging(settings.log_level)

    if args.reload:
        # The reloader re-imports the app in a subprocess; pass settings through the environment.
        if args.config:
            os.environ["KVFACADE_CONFIG"] = args.config
        for name in ("host", "port", "variant", "log_level"):
            os.environ[ENV_VARS[name]] = str(getattr(settings, name))
        uvicorn.run(
            "kv_facade.main:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            reload=True,
            log_level=settings.log_level.lower(),
        )
        return

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
