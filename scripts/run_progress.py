"""CLI de avance de fincas

Calcula la completitud por etapa y el avance de fincas de expropiación.

Uso:
    PYTHONPATH=backend python scripts/run_progress.py --finca 12
    PYTHONPATH=backend python scripts/run_progress.py --finca 12 13 14
    PYTHONPATH=backend python scripts/run_progress.py --proyecto 3
    PYTHONPATH=backend python scripts/run_progress.py --finca 12 --detalle
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

# PYTHONPATH automático
backend_dir = str(Path(__file__).resolve().parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from expropia.config import settings  # noqa: E402
from expropia.models.progress import CaseProgress, ProgressResult  # noqa: E402
from expropia.services.progress.aggregator import StageCompletionAggregator  # noqa: E402
from expropia.services.progress.stages import get_stage  # noqa: E402
from expropia.services.sources.client import ExpropiacionesApiClient  # noqa: E402


def setup_logging(verbose: bool = False) -> None:
    """Configuración de logging"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Silenciar logs de httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def print_case(result: CaseProgress) -> None:
    """Detalle por etapa de una finca"""
    progress = result.progress
    print(f"\n{'='*50}")
    print(
        f"Finca {result.case_id}: {progress.completed_count} de "
        f"{progress.total_count} etapas ({progress.percentage}%)"
    )
    print(f"{'='*50}")
    for key, completion in result.completion.stages.items():
        stage = get_stage(key)
        number = f"{stage.ordinal}." if stage.ordinal is not None else "*"
        status = "Completada" if completion.completed else "Pendiente"
        print(f"  {number:<3}{stage.label:<24}: {status}")
        for item, done in completion.sub_items.items():
            print(f"       - {item:<20}: {'Completada' if done else 'Pendiente'}")
    if result.unavailable_sources:
        sources = ", ".join(s.value for s in result.unavailable_sources)
        print(f"  Fuentes no disponibles: {sources}")
    print()


def print_batch(progress_map: dict[str, ProgressResult]) -> None:
    """Resumen de avance por finca"""
    print(f"\n{'='*50}")
    print(f"Avance de {len(progress_map)} fincas")
    print(f"{'='*50}")
    for case_id, progress in progress_map.items():
        print(
            f"  Finca {case_id:<10}: {progress.percentage:>3}% "
            f"({progress.completed_count}/{progress.total_count})"
        )
    print()


async def run(args: argparse.Namespace) -> None:
    # Un solo pool de conexiones para todas las lecturas de la ejecución
    async with httpx.AsyncClient(timeout=settings.SOURCE_TIMEOUT) as http:
        aggregator = StageCompletionAggregator(
            client=ExpropiacionesApiClient(http_client=http),
        )
        if args.proyecto:
            print_batch(await aggregator.get_project_progress(args.proyecto))
        elif args.detalle:
            for case_id in args.finca:
                print_case(await aggregator.get_case_progress(case_id))
        else:
            print_batch(await aggregator.get_batch_progress(args.finca))


def main() -> None:
    parser = argparse.ArgumentParser(description="Avance de fincas de expropiación")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--finca", nargs="+", help="Id(s) de finca")
    group.add_argument("--proyecto", type=str, help="Id de proyecto (todas sus fincas)")
    parser.add_argument(
        "--detalle", action="store_true", help="Detalle por etapa (solo con --finca)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Logging detallado")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)
    asyncio.run(run(args))


if __name__ == "__main__":
    main()
