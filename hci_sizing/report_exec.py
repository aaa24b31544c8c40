"""
Geração de relatório executivo (resumo para terminal e relatório Markdown executivo).
"""

from typing import List, Optional

from .cluster import ClusterConfig
from .engine import Evaluation
from .calc_scenarios import SchemeScenario
from .calc_health import HEALTH_GOOD, HEALTH_ACCEPTABLE, HEALTH_AT_RISK, HEALTH_WARNING
from .report_full import SCHEME_LABELS, format_ms
from .validator import errors_of, warnings_of


HEALTH_LABELS = {
    HEALTH_GOOD: "[OK] Excelente",
    HEALTH_ACCEPTABLE: "[ATENCAO] Aceitavel",
    HEALTH_AT_RISK: "[RISCO] Em risco",
    HEALTH_WARNING: "[AVISO] Configuracao com warnings",
}


def format_exec_summary(
    config: ClusterConfig,
    evaluation: Evaluation,
    text_report_path: Optional[str] = None,
    json_report_path: Optional[str] = None
) -> str:
    """
    Gera resumo executivo para exibição no terminal.

    Returns:
        String com resumo formatado
    """
    lines = []

    lines.append("=" * 80)
    lines.append("RESUMO EXECUTIVO - SIZING DE CLUSTER HCI (vSAN ESA)")
    lines.append("=" * 80)
    lines.append("")

    scheme = SCHEME_LABELS.get(config.redundancy_scheme, config.redundancy_scheme)
    lines.append(f"Cluster:             {config.hosts} hosts x {config.drives_per_host} NVMe")
    lines.append(f"Protecao:            FTT={config.ftt} {scheme}")
    lines.append(f"Workload:            {config.vm_count:,} VMs x {config.iops_per_vm:,.0f} IOPS "
                 f"({config.read_ratio * 100:.0f}% leitura, {config.block_size_kib:g} KiB)")
    lines.append("")

    r = evaluation.result
    if r is None:
        lines.append("Invalid configuration:")
        for error in errors_of(evaluation.diagnostics):
            lines.append(f"   - {error}")
    else:
        lines.append(f"Latencia Leitura:    {format_ms(r.read_latency_us)}")
        lines.append(f"Latencia Escrita:    {format_ms(r.write_latency_us)}")
        lines.append(f"Escrita P95:         {format_ms(r.p95_write_latency_us)}")
        lines.append(f"Rede x Fan-out:      {round(r.write_fanout_us)} µs")
        lines.append(f"Pressao de Fila:     +{round(r.queue_pressure_pct)}%")
        lines.append("")
        lines.append(f"Saude:               {HEALTH_LABELS.get(r.health_tier, r.health_tier)}")
        if r.health_tier == HEALTH_WARNING:
            lines.append("Configuration warnings:")
            for warning in warnings_of(evaluation.diagnostics):
                lines.append(f"   - {warning}")
        else:
            lines.append(f"   {r.health_message}")

    if text_report_path or json_report_path:
        lines.append("")
        lines.append("Relatorios gerados:")
        if text_report_path:
            lines.append(f"   Texto: {text_report_path}")
        if json_report_path:
            lines.append(f"   JSON:  {json_report_path}")

    lines.append("=" * 80)
    return "\n".join(lines)


def format_executive_markdown(
    config: ClusterConfig,
    evaluation: Evaluation,
    scenarios: Optional[List[SchemeScenario]] = None,
    profile_name: Optional[str] = None
) -> str:
    """Gera relatório executivo em Markdown."""
    md: List[str] = []

    title = f"# Sizing de Cluster HCI - {profile_name}" if profile_name else "# Sizing de Cluster HCI"
    md.append(title)
    md.append("")

    md.append("## Configuracao")
    md.append("")
    md.append("| Parametro | Valor |")
    md.append("|---|---|")
    md.append(f"| Hosts | {config.hosts} |")
    md.append(f"| NVMe por host | {config.drives_per_host} |")
    md.append(f"| Protecao | FTT={config.ftt} {SCHEME_LABELS.get(config.redundancy_scheme, config.redundancy_scheme)} |")
    md.append(f"| VMs | {config.vm_count:,} |")
    md.append(f"| IOPS por VM | {config.iops_per_vm:,.0f} |")
    md.append(f"| Leituras | {config.read_ratio * 100:.0f}% |")
    md.append(f"| Block size | {config.block_size_kib:g} KiB |")
    md.append(f"| NVMe / RTT / ESA | {config.device_latency_us:g} / {config.network_rtt_us:g} / {config.fabric_overhead_us:g} µs |")
    md.append("")

    r = evaluation.result
    md.append("## Resultado")
    md.append("")
    if r is None:
        md.append("**Configuracao invalida.** Nenhuma estimativa foi calculada.")
        md.append("")
        for error in errors_of(evaluation.diagnostics):
            md.append(f"- {error}")
    else:
        md.append("| Metrica | Valor |")
        md.append("|---|---|")
        md.append(f"| Latencia de leitura | {format_ms(r.read_latency_us)} |")
        md.append(f"| Latencia de escrita | {format_ms(r.write_latency_us)} |")
        md.append(f"| Escrita P95 | {format_ms(r.p95_write_latency_us)} |")
        md.append(f"| Saude | **{r.health_tier}** |")
        md.append("")

        warnings = warnings_of(evaluation.diagnostics)
        if warnings:
            md.append("### Warnings")
            md.append("")
            for warning in warnings:
                md.append(f"- {warning}")
        else:
            md.append(f"> {r.health_message}")
    md.append("")

    if scenarios:
        md.append("## Comparativo de Esquemas")
        md.append("")
        md.append("| Esquema | Escrita | P95 | Saude |")
        md.append("|---|---|---|---|")
        for s in scenarios:
            label = SCHEME_LABELS.get(s.scheme, s.scheme)
            if s.selected:
                label = f"**{label}**"
            sr = s.evaluation.result
            if sr is None:
                md.append(f"| {label} | - | - | Invalido |")
            else:
                md.append(f"| {label} | {format_ms(sr.write_latency_us)} | "
                          f"{format_ms(sr.p95_write_latency_us)} | {sr.health_tier} |")
        md.append("")

    return "\n".join(md)
