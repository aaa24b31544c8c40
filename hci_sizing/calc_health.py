"""
Classificação de saúde da configuração a partir da latência de escrita estimada.
"""

from dataclasses import dataclass
from typing import List


HEALTH_WARNING = "Warning"
HEALTH_GOOD = "Good"
HEALTH_ACCEPTABLE = "Acceptable"
HEALTH_AT_RISK = "AtRisk"

# Limiares de latência de escrita (µs)
WRITE_GOOD_US = 2000
WRITE_ACCEPTABLE_US = 5000

GOOD_MESSAGE = "Excellent: ESA latency well within steady-state production expectations."
ACCEPTABLE_MESSAGE = "Acceptable: Monitor growth, VM fan-out, and failure scenarios."
AT_RISK_MESSAGE = "At Risk: Consider more hosts, more NVMe drives, EC policies, or lower FTT."


@dataclass(frozen=True)
class HealthStatus:
    tier: str     # "Good" | "Acceptable" | "AtRisk" | "Warning"
    message: str


def classify_health(write_latency_us: float, warnings: List[str]) -> HealthStatus:
    """
    Classifica a saúde da configuração.

    Warnings sempre têm prioridade sobre os limiares de latência, mesmo
    quando a latência estimada é excelente.
    """
    if warnings:
        return HealthStatus(HEALTH_WARNING, "\n".join(warnings))
    if write_latency_us < WRITE_GOOD_US:
        return HealthStatus(HEALTH_GOOD, GOOD_MESSAGE)
    if write_latency_us < WRITE_ACCEPTABLE_US:
        return HealthStatus(HEALTH_ACCEPTABLE, ACCEPTABLE_MESSAGE)
    return HealthStatus(HEALTH_AT_RISK, AT_RISK_MESSAGE)
