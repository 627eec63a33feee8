"""
MangaPanelCut - CLI (Command Line Interface)

Interface de linha de comando para dividir páginas escaneadas em painéis.
"""

import sys
import argparse
from pathlib import Path

from core.logging.setup import setup_logging

from config.settings import (
    COLOR_TOLERANCE, CROP_COLOR_TOLERANCE, CROP_MARGINS, DEFAULT_ZERO_POINT,
    FLOOD_FILL_MAX_PENDING, LABEL_CAPACITY, LOG_LEVEL, MIN_PANEL_PIXELS, OUTPUT_FORMAT,
    READING_RTL, SUPPORTED_FORMATS, VERBOSE
)
from core.exceptions import (
    CapacityExceededError, ImageLoadError, OutOfRangeError, PanelError, ResourceLimitError
)
from core.segmentation.area import Area


def print_progress(page_num: int, stage: str, progress: float):
    """Callback de progresso para CLI."""
    bar_length = 30
    filled = int(bar_length * progress / 100)
    bar = '█' * filled + '░' * (bar_length - filled)
    print(f"\r  Página {page_num+1}: [{bar}] {progress:.1f}% - {stage}", end='', flush=True)
    if progress >= 100:
        print()


def _build_options(args):
    from core.pipeline import SegmentationOptions

    return SegmentationOptions(
        tolerance=args.tolerance,
        zero_point=tuple(args.seed),
        crop_margins=args.crop,
        crop_tolerance=args.crop_tolerance if args.crop_tolerance is not None else args.tolerance,
        crop_point=tuple(args.crop_seed) if args.crop_seed else None,
        bounds=Area.from_bbox(args.bounds) if args.bounds else None,
        reading_rtl=args.rtl,
        min_panel_pixels=args.min_pixels,
        output_format=args.format,
        write_manifest=args.manifest,
        debug_overlay=args.debug_overlay,
        max_pending=args.max_pending,
        label_capacity=args.label_capacity,
    )


def split_command(args):
    """Comando: split (página -> painéis)"""
    from core.pipeline import PanelSegmentationPipeline

    setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        options = _build_options(args)
    except ValueError as e:
        print(f"[ERRO] Opções inválidas: {e}")
        return 1

    print(f"[SPLIT] Segmentando {len(args.input)} página(s)...")
    print(f"  Tolerância: {options.tolerance}")
    print(f"  Ponto zero: {options.zero_point}")
    print(f"  Saída: {Path(args.output).absolute()}")

    pipeline = PanelSegmentationPipeline(options)
    if args.progress:
        pipeline.set_progress_callback(print_progress)

    try:
        reports = pipeline.process_batch(args.input, args.output, fail_fast=args.fail_fast)
    except OutOfRangeError as e:
        print(f"\n[ERRO] Coordenada fora da imagem: {e}")
        return 1
    except ImageLoadError as e:
        print(f"\n[ERRO] Falha ao ler imagem '{e.path}': {e}")
        return 1
    except (CapacityExceededError, ResourceLimitError) as e:
        print(f"\n[ERRO] Limite de recursos: {e}")
        print("Sugestão: ajuste MANGA_PANEL_LABEL_CAPACITY / MANGA_PANEL_MAX_PENDING ou use --crop-tolerance.")
        return 2
    except PanelError as e:
        print(f"\n[ERRO] Falha na segmentação: {e}")
        return 1

    failed = [r for r in reports if not r.ok]
    for report in reports:
        status = "OK" if report.ok else "FALHOU"
        print(f"  [{status}] {report.source}: {report.num_panels} painéis -> {report.output_dir}")

    print(f"\n[OK] {len(reports) - len(failed)}/{len(reports)} páginas, "
          f"{sum(r.num_panels for r in reports)} painéis")
    return 1 if failed else 0


def info_command(args):
    """Comando: info (configuração efetiva)"""
    print("Configuração MangaPanelCut")
    print("=" * 40)
    print(f"Tolerância de cor: {COLOR_TOLERANCE}")
    print(f"Ponto zero: {DEFAULT_ZERO_POINT}")
    print(f"Recorte de margens: {CROP_MARGINS} (tolerância {CROP_COLOR_TOLERANCE})")
    print(f"Fila máxima do flood fill: {FLOOD_FILL_MAX_PENDING}")
    print(f"Capacidade de rótulos: {LABEL_CAPACITY or 'dinâmica'}")
    print(f"Leitura: {'direita -> esquerda' if READING_RTL else 'esquerda -> direita'}")
    print(f"Pixels mínimos por painel: {MIN_PANEL_PIXELS}")
    print(f"Formato de saída: {OUTPUT_FORMAT}")
    print(f"Nível de log: {LOG_LEVEL}")

    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="manga-panelcut",
        description="MangaPanelCut - CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemplos:
  # Divide uma página (moldura amostrada em (0, 0))
  python cli.py split page_001.png --output ./panels

  # Várias páginas, leitura ocidental, manifest e overlay de depuração
  python cli.py split pages/*.png -o ./panels --ltr --manifest --debug-overlay

  # Semente da moldura em outro ponto, tolerância mais estreita
  python cli.py split page.png --seed 200 615 --tolerance 60
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Comandos disponíveis")

    # Comando: split
    split_parser = subparsers.add_parser(
        "split",
        help="Divide páginas em painéis"
    )
    split_parser.add_argument(
        "input",
        nargs="+",
        help="Arquivos de imagem das páginas"
    )
    split_parser.add_argument(
        "--output",
        "-o",
        default="./panels",
        help="Diretório de saída (um subdiretório por página)"
    )
    split_parser.add_argument(
        "--tolerance",
        "-t",
        type=int,
        default=COLOR_TOLERANCE,
        help="Tolerância de cor da moldura"
    )
    split_parser.add_argument(
        "--seed",
        nargs=2,
        type=int,
        metavar=("X", "Y"),
        default=list(DEFAULT_ZERO_POINT),
        help="Ponto zero do flood fill"
    )
    split_parser.add_argument(
        "--crop-tolerance",
        type=int,
        help="Tolerância do recorte de margens (default: --tolerance)"
    )
    split_parser.add_argument(
        "--crop-seed",
        nargs=2,
        type=int,
        metavar=("X", "Y"),
        help="Ponto de referência das margens (default: --seed)"
    )
    split_parser.add_argument(
        "--no-crop",
        dest="crop",
        action="store_false",
        default=CROP_MARGINS,
        help="Não recortar margens"
    )
    split_parser.add_argument(
        "--bounds",
        nargs=4,
        type=int,
        metavar=("X1", "Y1", "X2", "Y2"),
        help="Limites explícitos da rotulagem (semiabertos)"
    )
    split_parser.add_argument(
        "--ltr",
        dest="rtl",
        action="store_false",
        default=READING_RTL,
        help="Ordem de leitura esquerda -> direita"
    )
    split_parser.add_argument(
        "--min-pixels",
        type=int,
        default=MIN_PANEL_PIXELS,
        help="Descarta painéis com menos pixels"
    )
    split_parser.add_argument(
        "--format",
        default=OUTPUT_FORMAT,
        choices=list(SUPPORTED_FORMATS),
        help="Formato dos painéis"
    )
    split_parser.add_argument(
        "--max-pending",
        type=int,
        default=FLOOD_FILL_MAX_PENDING,
        help="Limite da fila do flood fill"
    )
    split_parser.add_argument(
        "--label-capacity",
        type=int,
        default=LABEL_CAPACITY,
        help="Limite de rótulos brutos (default: dinâmico)"
    )
    split_parser.add_argument(
        "--manifest",
        action="store_true",
        help="Grava panels.json por página"
    )
    split_parser.add_argument(
        "--debug-overlay",
        action="store_true",
        help="Grava a página com a moldura pintada"
    )
    split_parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Interrompe o lote no primeiro erro"
    )
    split_parser.add_argument(
        "--progress",
        action="store_true",
        help="Mostra barra de progresso"
    )
    split_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=VERBOSE,
        help="Log detalhado"
    )
    split_parser.add_argument(
        "--log-file",
        help="Arquivo de log opcional"
    )
    split_parser.set_defaults(func=split_command)

    # Comando: info
    info_parser = subparsers.add_parser(
        "info",
        help="Configuração efetiva"
    )
    info_parser.set_defaults(func=info_command)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
