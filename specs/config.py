# specs/config.py
import json
import os
from dataclasses import asdict, dataclass
from typing import Literal

DType = Literal["float32", "float64", "float16", "bfloat16"]

@dataclass
class AttentionConfig:
    dtype: DType = "float32"
    # rounding digits for printed weights/outputs
    precision: int = 4
    # report NaN/Inf in inputs and outputs (never alters values)
    check_finite: bool = False
    report_entropy: bool = False
    # seed for demo matrices
    seed: int = 0


def load_config(path: str) -> AttentionConfig:
    with open(path, "r", encoding="utf-8") as f:
        d = json.load(f)
    return AttentionConfig(**d)


def save_config(cfg: AttentionConfig, path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(cfg), f, indent=2)
    return path
