#!/usr/bin/env python3
"""Ask the DeFi assistant from the command line. Keeps history across turns in --interactive mode."""
import argparse
import json
import os
import sys
from typing import Any

import httpx

GATEWAY_URL = os.environ.get("GATEWAY_BASE_URL", "http://127.0.0.1:8000")


def _trace_request(method: str, url: str, body: dict | None, trace: bool) -> None:
    if not trace:
        return
    print(f"[REQUEST] {method} {url}", flush=True)
    if body is not None:
        print("[REQUEST BODY]", flush=True)
        print(json.dumps(body, indent=2), flush=True)
    print(flush=True)


def _trace_response(status: int, body: Any, trace: bool, max_body_len: int = 2000) -> None:
    if not trace:
        return
    print(f"[RESPONSE] {status}", flush=True)
    raw = json.dumps(body, indent=2) if isinstance(body, dict) else str(body)
    if len(raw) > max_body_len:
        raw = raw[:max_body_len] + "\n… (truncated)"
    print(raw, flush=True)
    print("---", flush=True)


def ask(base: str, message: str, history: list[dict], session_id: str | None, trace: bool) -> dict:
    url = f"{base}/api/chat"
    body: dict[str, Any] = {"message": message, "history": history}
    if session_id:
        body["session_id"] = session_id
    _trace_request("POST", url, body, trace)
    r = httpx.post(url, json=body, timeout=120)
    try:
        data = r.json()
    except ValueError:
        data = {"success": False, "error": "Invalid response", "details": r.text}
    _trace_response(r.status_code, data, trace)
    return data


def main():
    parser = argparse.ArgumentParser(description="Send a question to the DeFi assistant and print the answer.")
    parser.add_argument("query", nargs="*", help="Question text")
    parser.add_argument("--url", default=GATEWAY_URL, help="Gateway base URL")
    parser.add_argument("--session", default=None, help="Session id for server-side memory")
    parser.add_argument("--interactive", "-i", action="store_true", help="Keep asking; history is sent with each turn")
    parser.add_argument("--trace", action="store_true", help="Print request and response bodies")
    args = parser.parse_args()
    query = " ".join(args.query).strip()
    if not query and not args.interactive:
        print("Usage: python scripts/query_cli.py \"What is Aave's TVL?\"", file=sys.stderr)
        sys.exit(1)

    base = args.url.rstrip("/")
    history: list[dict] = []
    try:
        while True:
            if not query:
                try:
                    query = input("> ").strip()
                except EOFError:
                    break
                if not query:
                    continue
            data = ask(base, query, history, args.session, args.trace)
            if data.get("success"):
                answer = data.get("response", "")
                print(answer, flush=True)
                history.append({"role": "user", "content": query})
                history.append({"role": "assistant", "content": answer})
            else:
                print(f"Error: {data.get('error')} ({data.get('details')})", file=sys.stderr)
            if not args.interactive:
                break
            query = ""
    except httpx.ConnectError:
        print(f"Cannot reach gateway at {args.url}. Is it running?", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
