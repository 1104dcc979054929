#!/usr/bin/env python3
"""
Example 2: Public bucket

Creates a bucket readable by everyone, then loads it through an
unauthenticated client.

Usage:
    python 02_permissions.py --server http://localhost:8888/v1 --auth user:secret
"""

import argparse
import sys

from kinto_client import BasicAuth, ClientConfig, KintoClient, KintoError


def main():
    parser = argparse.ArgumentParser(description="Share a Kinto bucket publicly")
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

    args = parser.parse_args()

    print("=== Kinto Example 2: Public bucket ===")
    owner = KintoClient(ClientConfig(args.server, auth=BasicAuth.parse(args.auth)))
    anonymous = KintoClient(ClientConfig(args.server))

    try:
        bucket = owner.bucket(data={"title": "Hello World"})
        bucket.permissions.read.append("system.Everyone")
        bucket.set()
        print(f"Bucket {bucket.id} permissions: {bucket.permissions.to_wire()}")

        public = anonymous.bucket(bucket.id).load()
        print(f"Anonymous read: {public.data}")
    except KintoError as e:
        print(f"Failed: {e}")
        return 1
    finally:
        owner.close()
        anonymous.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
