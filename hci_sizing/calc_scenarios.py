"""
Cenários comparativos: a mesma configuração avaliada com cada esquema de redundância.
"""

from dataclasses import dataclass, replace
from typing import List

from .cluster import ClusterConfig, REDUNDANCY_SCHEMES
from .engine import Evaluation, evaluate


@dataclass
class SchemeScenario:
    """Avaliação de um esquema de redundância para o cluster."""
    scheme: str
    evaluation: Evaluation
    selected: bool = False  # esquema pedido pelo usuário


def compare_schemes(config: ClusterConfig) -> List[SchemeScenario]:
    """
    Avalia o cluster com mirror, raid5 e raid6 (nesta ordem).

    Topologia, workload e FTT são mantidos; apenas o esquema muda. Esquemas
    ilegais para o número de hosts aparecem com seus diagnósticos Error e
    sem resultado.
    """
    scenarios = []
    for scheme in REDUNDANCY_SCHEMES:
        variant = replace(config, redundancy_scheme=scheme)
        scenarios.append(SchemeScenario(
            scheme=scheme,
            evaluation=evaluate(variant),
            selected=(scheme == config.redundancy_scheme),
        ))
    return scenarios
