#!/usr/bin/env python3
"""
CLI‑обёртка: перечислить варианты достройки родителей для pedigree.csv.

Примеры:
    python -m pedbuild.main --pedigree data/pedigree.csv
    python -m pedbuild.main --pedigree data/pedigree.csv --max_linear_inb 0 --sex_symmetry
    python -m pedbuild.main --pedigree data/pedigree.csv --fast
"""
from __future__ import annotations
import argparse
import math

import pandas as pd

from .adjacency import PedigreeGraph
from .completion import add_missing_parents, add_missing_parents1


def _load_pedigree(path: str) -> PedigreeGraph:
    df = pd.read_csv(path, dtype={"id": str, "father_id": str, "mother_id": str})
    return PedigreeGraph.from_frame(df)


def _parse(argv=None):
    p = argparse.ArgumentParser("pedbuild")
    p.add_argument("--pedigree", required=True,
                   help="CSV с колонками id, father_id, mother_id, sex")
    p.add_argument("--max_linear_inb", type=int, default=None,
                   help="макс. расстояние линейного инбридинга (по умолчанию без ограничений)")
    p.add_argument("--sex_symmetry", action="store_true",
                   help="не различать варианты, отличающиеся только полом добавленных")
    p.add_argument("--fast", action="store_true",
                   help="быстрый путь: только особи без ровно одного родителя")
    p.add_argument("--progress", action="store_true")

    return p.parse_args(argv)


def main(argv=None):
    args = _parse(argv)
    graph = _load_pedigree(args.pedigree)

    if args.fast:
        results = [add_missing_parents1(graph)]
    else:
        results = add_missing_parents(
            graph,
            max_linear_inb=math.inf if args.max_linear_inb is None else args.max_linear_inb,
            sex_symmetry=args.sex_symmetry,
            progress=args.progress,
        )

    for k, ped in enumerate(results, start=1):
        print(f"# candidate {k}")
        print(ped.to_frame().to_string(index=False))
    print(f"✅  {len(results)} candidate pedigrees")
    return results


if __name__ == "__main__":
    main()
