from __future__ import annotations

import argparse
import json
from dataclasses import replace
from typing import Any

import numpy as np
import torch

from specs.config import AttentionConfig, load_config
from tensor.debug import check_finite
from tensor.dtypes import as_real_matrix, cast_for_softmax, resolve_dtype
from tensor.numerics import entropy_from_logits
from .reference import attention, compute_attention_scores


def _round(t: torch.Tensor, precision: int) -> list:
    return torch.round(t.double(), decimals=precision).tolist()


def _resolve_config(args: argparse.Namespace) -> AttentionConfig:
    cfg = load_config(args.config) if args.config else AttentionConfig()
    overrides: dict[str, Any] = {}
    if args.dtype is not None:
        overrides["dtype"] = args.dtype
    if args.precision is not None:
        overrides["precision"] = int(args.precision)
    if args.check_finite:
        overrides["check_finite"] = True
    if args.entropy:
        overrides["report_entropy"] = True
    if getattr(args, "seed", None) is not None:
        overrides["seed"] = int(args.seed)
    return replace(cfg, **overrides)


def _run(cfg: AttentionConfig, query: Any, key: Any, value: Any) -> dict:
    dtype = resolve_dtype(cfg.dtype)
    q = as_real_matrix(query, dtype, name="query")
    k = as_real_matrix(key, dtype, name="key")
    v = as_real_matrix(value, dtype, name="value")
    if cfg.check_finite:
        check_finite({"query": q, "key": k, "value": v})
    out, weights = attention(q, k, v)
    if cfg.check_finite:
        check_finite({"output": out, "weights": weights})
    payload: dict[str, Any] = {
        "shapes": {
            "query": list(q.shape),
            "key": list(k.shape),
            "value": list(v.shape),
            "output": list(out.shape),
            "weights": list(weights.shape),
        },
        "weights": _round(weights, cfg.precision),
        "output": _round(out, cfg.precision),
    }
    if cfg.report_entropy:
        scores = compute_attention_scores(cast_for_softmax(q), cast_for_softmax(k))
        payload["entropy"] = _round(entropy_from_logits(scores), cfg.precision)
    return payload


def _load_inputs(path: str) -> dict[str, Any]:
    # .npz archives hold query/key/value arrays; anything else is JSON
    if path.endswith(".npz"):
        with np.load(path) as arrays:
            return {name: torch.from_numpy(arrays[name]) for name in ("query", "key", "value")}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def cmd_run(args: argparse.Namespace) -> None:
    cfg = _resolve_config(args)
    d = _load_inputs(args.inputs)
    payload = _run(cfg, d["query"], d["key"], d["value"])
    print(json.dumps(payload))


def cmd_demo(args: argparse.Namespace) -> None:
    cfg = _resolve_config(args)
    g = torch.Generator().manual_seed(int(cfg.seed))
    dtype = resolve_dtype(cfg.dtype)
    q = torch.randn(args.n_q, args.d_k, generator=g).to(dtype)
    k = torch.randn(args.n_k, args.d_k, generator=g).to(dtype)
    v = torch.randn(args.n_k, args.d_v, generator=g).to(dtype)
    payload = _run(cfg, q, k, v)
    payload["inputs"] = {
        "query": _round(q, cfg.precision),
        "key": _round(k, cfg.precision),
        "value": _round(v, cfg.precision),
    }
    print(json.dumps(payload))


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", type=str, default=None, help="JSON file with AttentionConfig fields")
    p.add_argument("--dtype", type=str, default=None, choices=["float32", "float64", "float16", "bfloat16"])
    p.add_argument("--precision", type=int, default=None, help="Decimal places in printed matrices")
    p.add_argument("--check-finite", action="store_true", help="Warn on NaN/Inf in inputs or outputs")
    p.add_argument("--entropy", action="store_true", help="Report per-query entropy of the weights")


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="attn", description="Scaled dot-product attention")
    sub = p.add_subparsers(dest="cmd")

    p_run = sub.add_parser("run", help="Run attention on query/key/value matrices from a JSON file")
    p_run.add_argument("--inputs", type=str, required=True, help='JSON or .npz with "query", "key", "value" matrices')
    _add_common(p_run)

    p_demo = sub.add_parser("demo", help="Run attention on seeded random matrices")
    p_demo.add_argument("--n-q", type=int, default=2)
    p_demo.add_argument("--n-k", type=int, default=3)
    p_demo.add_argument("--d-k", type=int, default=4)
    p_demo.add_argument("--d-v", type=int, default=4)
    p_demo.add_argument("--seed", type=int, default=None)
    _add_common(p_demo)

    args = p.parse_args(argv)

    if args.cmd == "run":
        cmd_run(args)
        return
    if args.cmd == "demo":
        cmd_demo(args)
        return

    p.print_help()


if __name__ == "__main__":  # pragma: no cover
    main()
