#!/usr/bin/env python3
"""
Example 1: Hello World

Creates a record with a server-generated id in the ``notes`` collection of a
bucket, then loads it back by id through a fresh resource.

Usage:
    python 01_hello_world.py --server http://localhost:8888/v1 --auth user:secret
"""

import argparse
import json
import logging
import sys

from kinto_client import BasicAuth, ClientConfig, KintoClient, KintoError


def main():
    parser = argparse.ArgumentParser(description="Create and reload a Kinto record")
    parser.add_argument(
        "--server",
        default="http://localhost:8888/v1",
        help="Kinto server URL"
    )
    parser.add_argument(
        "--auth",
        default="user:secret",
        help="Basic credentials as user:password"
    )
    parser.add_argument(
        "--bucket",
        default="default",
        help="Bucket holding the notes collection"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every HTTP exchange"
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    config = ClientConfig(args.server, auth=BasicAuth.parse(args.auth), debug=args.debug)

    print("=== Kinto Example 1: Hello World ===")
    with KintoClient(config) as client:
        try:
            notes = client.bucket(args.bucket).collection("notes")
            new_record = notes.new_record({"title": "Hello World"})
            print(f"Created record {new_record.id} at {new_record.timestamp}")

            loaded = notes.record(new_record.id).load()
            print(json.dumps(loaded.data, indent=2))
        except KintoError as e:
            print(f"Failed: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
