#!/usr/bin/env python3
import argparse
import json
import os
import sys
from typing import Any, Dict

import requests

WORKER = os.getenv("WORKER_URL", "http://localhost:8090")
TOKEN = os.getenv("WORKER_AUTH_TOKEN", "")

# Raw text on purpose: the escapes must reach the worker undecoded.
GOLDEN_TEXT = (
    '{"items": [1, 2, 3, 4, 5, 6, 7], '
    '"nested": {"rows": [[1, 2, 3], [4, 5, 6], [7, 8, 9]]}, '
    '"greeting": "\\u4f60\\u597d"}'
)


def jprint(label: str, obj: Any):
    print(f"{label}: {json.dumps(obj, ensure_ascii=False)}")


def _headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {TOKEN}"} if TOKEN else {}


def get_json(url: str) -> Dict[str, Any]:
    r = requests.get(url, timeout=10)
    r.raise_for_status()
    return r.json()


def post_sample(body: Dict[str, Any]) -> requests.Response:
    return requests.post(f"{WORKER}/sample", json=body, headers=_headers(), timeout=30)


def must(cond: bool, label: str):
    if not cond:
        print(f"[FAIL] {label}")
        sys.exit(1)
    print(f"[ok] {label}")


def main() -> int:
    ap = argparse.ArgumentParser(description="Smoke test a running jsonsampler worker.")
    ap.add_argument("--length", type=int, default=2)
    args = ap.parse_args()

    must(get_json(f"{WORKER}/health").get("ok") is True, "health")

    r = post_sample(
        {
            "json_text": GOLDEN_TEXT,
            "list_length": args.length,
            "decode_escapes": True,
        }
    )
    must(r.status_code == 200, f"POST /sample -> {r.status_code}")
    body = r.json()
    out = json.loads(body["result"])
    jprint("result", out)
    must(len(out["items"]) == min(args.length, 7), "top-level array capped")
    must(
        all(len(row) <= args.length for row in out["nested"]["rows"]),
        "nested arrays capped",
    )
    must(out["greeting"] == "你好", "escapes decoded")

    r = post_sample({"json_text": '{"a":}'})
    must(r.status_code == 400, "malformed input rejected")
    detail = r.json().get("detail", {})
    jprint("parse_error", detail)
    must(detail.get("line") == 1, "parse error mapped to line 1")

    jprint("status", get_json(f"{WORKER}/status"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
