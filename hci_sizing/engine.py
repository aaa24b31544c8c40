"""
Ponto de entrada do núcleo: validação + estimativa de uma configuração de cluster.

evaluate() é uma função pura: sem I/O, sem estado compartilhado entre chamadas.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .cluster import ClusterConfig
from .calc_latency import LatencyEstimate, calc_latency_estimate, latency_estimate_to_dict
from .calc_health import classify_health
from .validator import Diagnostic, validate_cluster, has_errors, warnings_of


@dataclass(frozen=True)
class EstimationResult:
    """Resultado derivado de uma configuração sem diagnósticos Error."""

    read_latency_us: float
    write_latency_us: float
    p95_write_latency_us: float
    write_fanout_us: float
    queue_pressure_pct: float
    health_tier: str
    health_message: str

    # Detalhamento do modelo (fatores, demanda e componentes)
    estimate: LatencyEstimate


@dataclass
class Evaluation:
    """Diagnósticos ordenados + resultado (None quando há Error)."""

    diagnostics: List[Diagnostic]
    result: Optional[EstimationResult]

    @property
    def is_valid(self) -> bool:
        return self.result is not None


def evaluate(config: ClusterConfig) -> Evaluation:
    """
    Valida a configuração e, se não houver Error, estima latências e saúde.

    Args:
        config: Configuração de cluster completa

    Returns:
        Evaluation com todos os diagnósticos disparados (Errors e Warnings,
        na ordem das regras) e o resultado, ausente quando há qualquer Error
    """
    diagnostics = validate_cluster(config)
    if has_errors(diagnostics):
        return Evaluation(diagnostics=diagnostics, result=None)

    estimate = calc_latency_estimate(config)
    health = classify_health(estimate.write_latency_us, warnings_of(diagnostics))

    result = EstimationResult(
        read_latency_us=estimate.read_latency_us,
        write_latency_us=estimate.write_latency_us,
        p95_write_latency_us=estimate.p95_write_latency_us,
        write_fanout_us=estimate.write_fanout_us,
        queue_pressure_pct=estimate.queue_pressure_pct,
        health_tier=health.tier,
        health_message=health.message,
        estimate=estimate,
    )
    return Evaluation(diagnostics=diagnostics, result=result)


def evaluation_to_dict(evaluation: Evaluation) -> Dict[str, Any]:
    """Converte Evaluation para dict serializável em JSON."""
    data: Dict[str, Any] = {
        "valid": evaluation.is_valid,
        "diagnostics": [
            {"severity": d.severity, "message": d.message}
            for d in evaluation.diagnostics
        ],
        "result": None,
    }

    r = evaluation.result
    if r is not None:
        data["result"] = {
            "read_latency_us": round(r.read_latency_us, 1),
            "write_latency_us": round(r.write_latency_us, 1),
            "p95_write_latency_us": round(r.p95_write_latency_us, 1),
            "write_fanout_us": round(r.write_fanout_us, 1),
            "queue_pressure_pct": round(r.queue_pressure_pct, 1),
            "health": {
                "tier": r.health_tier,
                "message": r.health_message,
            },
            "model": latency_estimate_to_dict(r.estimate),
        }

    return data
