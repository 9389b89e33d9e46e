#!/usr/bin/env python3
# tools/invariants_runner.py
#
# Sizing invariants (property tests) over randomly generated items.
#
# This runner:
# - generates random items mixing tagged and bare values within limits
# - checks algebraic invariants of size_of()
#
# Exit code:
#   0 -> all checks passed
#   1 -> invariant violation

import os, sys, json, random
from decimal import Decimal
from typing import Any, Dict, List, Tuple

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from avsize import attribute_sizes, size_of, value_size

SEED = int(os.environ.get("AVSIZE_SEED", "1337"))
TRIALS = int(os.environ.get("AVSIZE_TRIALS", "2000"))
MAX_GEN_DEPTH = int(os.environ.get("AVSIZE_GEN_MAX_DEPTH", "5"))
MAX_KEYS = int(os.environ.get("AVSIZE_GEN_MAX_KEYS", "6"))
MAX_LIST = int(os.environ.get("AVSIZE_GEN_MAX_LIST", "6"))
MAX_STR = int(os.environ.get("AVSIZE_GEN_MAX_STR", "24"))

TAGS = ["S", "N", "B", "BOOL", "NULL", "M", "L", "SS", "NS", "BS"]

def rand_utf8_string(rng: random.Random) -> str:
    # Letters first so the text never parses as a number.
    out = [chr(rng.randint(0x61, 0x7A))]
    for _ in range(rng.randint(0, MAX_STR)):
        r = rng.random()
        if r < 0.70:
            out.append(chr(rng.randint(0x20, 0x7E)))
        elif r < 0.85:
            out.append(chr(rng.randint(0xA0, 0xFF)))
        elif r < 0.95:
            out.append(chr(rng.randint(0x0100, 0xD7FF)))
        else:
            out.append(chr(rng.randint(0x10000, 0x10FFFF)))
    return "".join(out)

def rand_name(rng: random.Random) -> str:
    # Attribute names outside the tag set, so one-key maps stay unambiguous.
    while True:
        name = rand_utf8_string(rng)[:12]
        if name not in TAGS:
            return name

def rand_number_text(rng: random.Random) -> str:
    whole = rng.randint(-10**9, 10**9)
    if rng.random() < 0.5:
        return str(whole)
    return "{}.{}".format(whole, rng.randint(0, 999999))

def rand_bytes(rng: random.Random) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(rng.randint(0, 32)))

def gen_scalar(rng: random.Random) -> Tuple[str, Any]:
    """Return (tag, payload) for a random scalar."""
    r = rng.random()
    if r < 0.35:
        return "S", rand_utf8_string(rng)
    if r < 0.65:
        return "N", rand_number_text(rng)
    if r < 0.80:
        return "B", rand_bytes(rng)
    if r < 0.92:
        return "BOOL", rng.random() < 0.5
    return "NULL", True

def gen_value(rng: random.Random, depth: int) -> Any:
    """Random tagged value; containers nest up to MAX_GEN_DEPTH."""
    r = rng.random()
    if depth < MAX_GEN_DEPTH and r < 0.20:
        return {"M": {rand_name(rng): gen_value(rng, depth + 1)
                      for _ in range(rng.randint(0, MAX_KEYS))}}
    if depth < MAX_GEN_DEPTH and r < 0.35:
        return {"L": [gen_value(rng, depth + 1) for _ in range(rng.randint(0, MAX_LIST))]}
    if r < 0.45:
        tag = rng.choice(["SS", "NS", "BS"])
        maker = {"SS": rand_utf8_string, "NS": rand_number_text, "BS": rand_bytes}[tag]
        return {tag: [maker(rng) for _ in range(rng.randint(0, MAX_LIST))]}
    tag, payload = gen_scalar(rng)
    return {tag: payload}

def gen_item(rng: random.Random) -> Dict[str, Any]:
    return {rand_name(rng): gen_value(rng, 1) for _ in range(rng.randint(0, MAX_KEYS))}

def bare(value: Any) -> Any:
    """Strip the wrapper from a tagged scalar (None stands in for NULL)."""
    tag = next(iter(value))
    if tag == "NULL":
        return None
    return value[tag]

def fail(label: str, context: Dict[str, Any]) -> int:
    print("INVARIANT FAIL:", label)
    print("CTX:", json.dumps(context, ensure_ascii=False, default=repr)[:2000])
    return 1

def run(trials: int = TRIALS, seed: int = SEED) -> int:
    rng = random.Random(seed)
    for t in range(trials):
        item = gen_item(rng)
        total = size_of(item)

        # (1) sizing is stable across calls
        if size_of(item) != total:
            return fail("stability", {"trial": t})

        # (2) additivity: the total is the sum of single-attribute items
        if sum(size_of({k: v}) for k, v in item.items()) != total:
            return fail("additivity", {"trial": t, "item": item})

        # (3) the breakdown agrees with the total
        if sum(attribute_sizes(item).values()) != total:
            return fail("breakdown sum", {"trial": t})

        # (4) attribute order doesn't matter
        keys: List[str] = list(item)
        rng.shuffle(keys)
        if size_of({k: item[k] for k in keys}) != total:
            return fail("order invariance", {"trial": t})

        # (5) bare scalars size like their tagged form
        tag, payload = gen_scalar(rng)
        tagged = {tag: payload}
        if value_size(bare(tagged)) != value_size(tagged):
            return fail("bare/tagged equivalence", {"trial": t, "value": tagged})

        # (6) trailing fractional zeros are free
        text = rand_number_text(rng)
        padded = text + ("0" * rng.randint(1, 3) if "." in text else ".000")
        if value_size({"N": text}) != value_size({"N": padded}):
            return fail("numeric canonicalization", {"trial": t, "n": [text, padded]})
        if value_size({"N": text}) != value_size(Decimal(padded)):
            return fail("decimal equivalence", {"trial": t, "n": [text, padded]})

        # (7) wrapping a value in a one-entry map costs name + tag + framing
        name = rand_name(rng)
        value = gen_value(rng, MAX_GEN_DEPTH)
        expected = value_size(value) + len(name.encode("utf-8")) + len(next(iter(value))) + 3
        if value_size({"M": {name: value}}) != expected:
            return fail("map framing", {"trial": t, "value": value})

    print(f"OK: invariants passed for TRIALS={trials} seed={seed}")
    return 0

def main() -> int:
    return run()

if __name__ == "__main__":
    sys.exit(main())
