"""
Geração de relatório completo (técnico detalhado) em texto e JSON.
"""

from typing import Any, Dict, List, Optional

from .cluster import ClusterConfig
from .engine import Evaluation, evaluation_to_dict
from .calc_scenarios import SchemeScenario
from .validator import errors_of, warnings_of


SCHEME_LABELS = {
    "mirror": "RAID-1 (Mirror)",
    "raid5": "RAID-5 (EC)",
    "raid6": "RAID-6 (EC)",
}


def format_ms(value_us: float) -> str:
    """Formata latência em µs como ms com 2 casas."""
    return f"{value_us / 1000:.2f} ms"


def _section(lines: List[str], title: str) -> None:
    lines.append("┌" + "─" * 98 + "┐")
    lines.append("│" + f" {title}".ljust(98) + "│")
    lines.append("└" + "─" * 98 + "┘")
    lines.append("")


def format_full_report(
    config: ClusterConfig,
    evaluation: Evaluation,
    scenarios: Optional[List[SchemeScenario]] = None,
    profile_name: Optional[str] = None
) -> str:
    """
    Gera relatório completo em texto.

    Returns:
        String com relatório formatado
    """
    lines = []

    lines.append("=" * 100)
    lines.append("RELATÓRIO COMPLETO DE SIZING - CLUSTER HCI (vSAN ESA)")
    lines.append("=" * 100)
    lines.append("")

    # Seção 1: Entradas
    _section(lines, "SEÇÃO 1: ENTRADAS")

    if profile_name:
        lines.append(f"Perfil: {profile_name}")
    lines.append("Topologia:")
    lines.append(f"  • Hosts: {config.hosts}")
    lines.append(f"  • Drives NVMe por host: {config.drives_per_host}")
    lines.append(f"  • FTT: {config.ftt}")
    lines.append(f"  • Esquema: {SCHEME_LABELS.get(config.redundancy_scheme, config.redundancy_scheme)}")
    lines.append("")

    total_iops = config.vm_count * config.iops_per_vm
    lines.append("Workload:")
    lines.append(f"  • VMs: {config.vm_count:,} ({config.vms_per_host:.1f} por host)")
    lines.append(f"  • IOPS por VM: {config.iops_per_vm:,.0f}")
    lines.append(f"  • IOPS total: {total_iops:,.0f} "
                 f"(leitura {total_iops * config.read_ratio:,.0f} / "
                 f"escrita {total_iops * (1 - config.read_ratio):,.0f})")
    lines.append(f"  • Leituras: {config.read_ratio * 100:.0f}%")
    lines.append(f"  • Block size: {config.block_size_kib:g} KiB")
    lines.append("")

    lines.append("Fabric:")
    lines.append(f"  • Latência NVMe: {config.device_latency_us:g} µs")
    lines.append(f"  • RTT de rede: {config.network_rtt_us:g} µs")
    lines.append(f"  • Overhead ESA: {config.fabric_overhead_us:g} µs")
    lines.append("")

    # Seção 2: Diagnósticos
    _section(lines, "SEÇÃO 2: GUARDRAILS")

    errors = errors_of(evaluation.diagnostics)
    warnings = warnings_of(evaluation.diagnostics)

    if not evaluation.diagnostics:
        lines.append("✅ Nenhum guardrail violado.")
    if errors:
        lines.append(f"❌ CONFIGURAÇÃO INVÁLIDA ({len(errors)} erro(s)):")
        for i, error in enumerate(errors, 1):
            lines.append(f"  {i}. {error}")
    if warnings:
        if errors:
            lines.append("")
        lines.append(f"⚠️  WARNINGS ({len(warnings)}):")
        for i, warning in enumerate(warnings, 1):
            lines.append(f"  {i}. {warning}")
    lines.append("")

    # Seção 3: Latência
    _section(lines, "SEÇÃO 3: PERFORMANCE ESTIMADA")

    r = evaluation.result
    if r is None:
        lines.append("Estimativa não calculada: corrija os erros acima.")
        lines.append("")
    else:
        le = r.estimate
        lines.append("LATÊNCIA:")
        lines.append(f"  • Leitura: {format_ms(r.read_latency_us)}")
        lines.append(f"  • Escrita: {format_ms(r.write_latency_us)}")
        lines.append(f"  • Escrita P95: {format_ms(r.p95_write_latency_us)}")
        lines.append("")

        lines.append("DETALHAMENTO DA ESCRITA:")
        lines.append(f"  • NVMe: {le.device_latency_us:g} µs")
        lines.append(f"  • ESA: {le.fabric_overhead_us:g} µs")
        lines.append(f"  • Rede × fan-out: {round(r.write_fanout_us)} µs "
                     f"(RTT {config.network_rtt_us:g} µs × {le.write_fanout_factor:g})")
        lines.append(f"  • Pressão de fila: +{round(r.queue_pressure_pct)}% "
                     f"({le.iops_per_drive:,.0f} IOPS/drive em {le.total_drives} drives)")
        lines.append(f"  • Amplificação de block: +{le.block_factor * 100:.1f}%")
        lines.append(f"  • Total: {format_ms(r.write_latency_us)}")
        lines.append("")

    # Seção 4: Saúde
    _section(lines, "SEÇÃO 4: SAÚDE")

    if r is None:
        lines.append("Invalid configuration:")
        for error in errors:
            lines.append(f"  {error}")
    else:
        lines.append(f"Status: {r.health_tier}")
        for line in r.health_message.split("\n"):
            lines.append(f"  {line}")
    lines.append("")

    # Seção 5: Comparativo (opcional)
    if scenarios:
        _section(lines, "SEÇÃO 5: COMPARATIVO DE ESQUEMAS")
        lines.extend(format_scenarios_table(scenarios))
        lines.append("")

    lines.append("=" * 100)
    return "\n".join(lines)


def format_scenarios_table(scenarios: List[SchemeScenario]) -> List[str]:
    """Tabela de comparação entre esquemas de redundância."""
    lines = []
    header = (f"{'Esquema':<20} {'Fan-out':<9} {'Leitura':<12} {'Escrita':<12} "
              f"{'P95':<12} {'Saúde':<12}")
    lines.append(header)
    lines.append("-" * 80)

    for s in scenarios:
        label = SCHEME_LABELS.get(s.scheme, s.scheme) + (" *" if s.selected else "")
        r = s.evaluation.result
        if r is None:
            first_error = errors_of(s.evaluation.diagnostics)[0]
            lines.append(f"{label:<20} {'-':<9} INVÁLIDO: {first_error}")
            continue
        lines.append(
            f"{label:<20} {r.estimate.write_fanout_factor:<9g} "
            f"{format_ms(r.read_latency_us):<12} {format_ms(r.write_latency_us):<12} "
            f"{format_ms(r.p95_write_latency_us):<12} {r.health_tier:<12}"
        )

    lines.append("-" * 80)
    lines.append("* esquema selecionado")
    return lines


def format_json_report(
    config: ClusterConfig,
    evaluation: Evaluation,
    scenarios: Optional[List[SchemeScenario]] = None,
    profile_name: Optional[str] = None
) -> Dict[str, Any]:
    """
    Gera relatório completo em formato JSON.

    Returns:
        Dict serializável para JSON
    """
    report: Dict[str, Any] = {
        "profile": profile_name,
        "inputs": config.to_dict(),
        "evaluation": evaluation_to_dict(evaluation),
    }

    if scenarios:
        report["scheme_comparison"] = [
            {
                "scheme": s.scheme,
                "selected": s.selected,
                "evaluation": evaluation_to_dict(s.evaluation),
            }
            for s in scenarios
        ]

    return report
