"""Command-line entry point for the Based Dropouts site."""

import argparse

from based_dropouts.server import run_server


def main():
    """Run the Based Dropouts site server."""
    parser = argparse.ArgumentParser(description="Serve the Based Dropouts site with live token stats")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--host", help="Host to bind to")
    args = parser.parse_args()

    run_server(port=args.port, host=args.host)


if __name__ == "__main__":
    main()
