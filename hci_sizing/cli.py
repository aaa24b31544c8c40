"""
CLI: Define argumentos de linha de comando.

A configuração do cluster vem de três camadas, nesta precedência:
  1. Flags individuais (--hosts, --ftt, ...)
  2. Perfil nomeado em clusters.json (--profile)
  3. Valores padrão (DEFAULT_CLUSTER)
"""

import argparse
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .cluster import ClusterConfig, DEFAULT_CLUSTER, REDUNDANCY_SCHEMES


@dataclass
class CLIConfig:
    """Configuração derivada dos argumentos CLI."""
    # Seleção de perfil
    profile_name: Optional[str]
    clusters_file: str

    # Overrides de campos do cluster (apenas os informados)
    cluster_overrides: Dict[str, Any]

    # Saídas
    compare_schemes: bool
    executive_report: bool
    json_only: bool
    no_write: bool
    output_dir: str
    verbose: bool
    validate_only: bool


def finite_float(value: str) -> float:
    """Tipo argparse: float finito (rejeita nan e inf)."""
    number = float(value)
    if not math.isfinite(number):
        raise argparse.ArgumentTypeError(f"valor não finito: '{value}'")
    return number


# (flag, campo do ClusterConfig, tipo, help)
_CLUSTER_FLAGS = [
    ("--hosts", "hosts", int, "Número de hosts do cluster (3 a 64)"),
    ("--drives-per-host", "drives_per_host", int, "Drives NVMe por host (1 a 24)"),
    ("--ftt", "ftt", int, "Failures to tolerate (1 a 3)"),
    ("--vm-count", "vm_count", int, "Número de VMs no cluster (1 a 10.000)"),
    ("--iops-per-vm", "iops_per_vm", finite_float, "IOPS por VM"),
    ("--block-size-kib", "block_size_kib", finite_float, "Block size de I/O em KiB (8 a 1024)"),
    ("--device-latency-us", "device_latency_us", finite_float, "Latência do device NVMe em µs"),
    ("--network-rtt-us", "network_rtt_us", finite_float, "RTT de rede entre hosts em µs"),
    ("--fabric-overhead-us", "fabric_overhead_us", finite_float, "Overhead fixo da pilha ESA em µs"),
]


def create_arg_parser() -> argparse.ArgumentParser:
    """Cria parser de argumentos CLI."""
    parser = argparse.ArgumentParser(
        description=(
            "Sizing de Clusters HCI (vSAN ESA)\n\n"
            "Valida a configuração contra guardrails de política e estima latência\n"
            "de leitura/escrita e saúde do cluster.\n\n"
            "Exemplo:\n"
            "  python main.py --profile baseline --hosts 8 --ftt 2"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    # Perfil
    parser.add_argument("--profile", help="Nome do perfil de cluster em clusters.json (ex: baseline)")
    parser.add_argument("--clusters-file", default="clusters.json",
                        help="Arquivo de perfis de cluster (default: clusters.json)")

    # Topologia, workload e fabric
    for flag, _, arg_type, help_text in _CLUSTER_FLAGS:
        parser.add_argument(flag, type=arg_type, help=help_text)
    parser.add_argument("--redundancy-scheme", choices=REDUNDANCY_SCHEMES,
                        help="Esquema de tolerância a falhas")
    parser.add_argument("--read-pct", type=finite_float,
                        help="Percentual de leituras (0 a 100)")

    # Saídas
    parser.add_argument("--compare-schemes", action="store_true",
                        help="Comparar mirror, RAID-5 e RAID-6 para o mesmo cluster")
    parser.add_argument("--executive-report", action="store_true",
                        help="Gerar relatório executivo adicional em Markdown")
    parser.add_argument("--json-only", action="store_true",
                        help="Imprimir apenas o relatório JSON no stdout")
    parser.add_argument("--no-write", action="store_true",
                        help="Não gravar relatórios em disco")
    parser.add_argument("--output-dir", default="relatorios",
                        help="Diretório dos relatórios (default: relatorios)")
    parser.add_argument("--verbose", action="store_true",
                        help="Modo verboso")

    # Validação
    parser.add_argument("--validate-only", action="store_true",
                        help="Apenas validar clusters.json (schema e guardrails) sem executar sizing")

    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> CLIConfig:
    """Parse argumentos CLI e retorna configuração."""
    parser = create_arg_parser()
    args = parser.parse_args(argv)

    overrides: Dict[str, Any] = {}
    for _, field, _, _ in _CLUSTER_FLAGS:
        value = getattr(args, field)
        if value is not None:
            overrides[field] = value

    if args.redundancy_scheme is not None:
        overrides["redundancy_scheme"] = args.redundancy_scheme

    if args.read_pct is not None:
        if not (0 <= args.read_pct <= 100):
            parser.error("ERRO: --read-pct deve estar entre 0 e 100.")
        overrides["read_ratio"] = args.read_pct / 100

    return CLIConfig(
        profile_name=args.profile,
        clusters_file=args.clusters_file,
        cluster_overrides=overrides,
        compare_schemes=args.compare_schemes,
        executive_report=args.executive_report,
        json_only=args.json_only,
        no_write=args.no_write,
        output_dir=args.output_dir,
        verbose=args.verbose,
        validate_only=args.validate_only
    )


def build_cluster_config(
    overrides: Dict[str, Any],
    base: Optional[ClusterConfig] = None
) -> ClusterConfig:
    """
    Monta a configuração final aplicando overrides sobre o perfil (ou defaults).

    Args:
        overrides: Campos informados na CLI
        base: Perfil carregado de clusters.json (None = DEFAULT_CLUSTER)

    Returns:
        ClusterConfig completa
    """
    fields = dict(DEFAULT_CLUSTER) if base is None else base.to_dict()
    fields.update(overrides)
    return ClusterConfig.from_dict(fields)
