"""
Modelo de performance ESA: estimativa de latência de leitura/escrita.

Modelo heurístico em forma fechada (não é simulação nem teoria de filas):

  F  = fan-out de escrita (mirror: ftt+1 | raid5: 1.33 | raid6: 1.5)
  Q  = min(IOPS_total / drives_total / 3000, 2.0)
  B  = log2(block_kib / 8 + 1) × 0.15

  read  = (device + fabric) × (1 + Q×0.4 + B)
  write = (device + fabric + rtt × F) × (1 + Q×0.6 + B)
  p95   = write × 1.35

Todas as latências em µs. Conversão para ms é responsabilidade dos relatórios.
"""

import math
from dataclasses import dataclass
from typing import Dict, Any

from .cluster import ClusterConfig, SCHEME_MIRROR, SCHEME_RAID5, SCHEME_RAID6


# Fan-out fixo dos esquemas de erasure coding (não escala com FTT)
RAID5_WRITE_FACTOR = 1.33
RAID6_WRITE_FACTOR = 1.5

# Ponto de saturação assumido por device NVMe (IOPS)
DEVICE_SATURATION_IOPS = 3000
QUEUE_FACTOR_CAP = 2.0

# Penalidade de block size, ancorada em 8 KiB
BLOCK_BASE_KIB = 8
BLOCK_FACTOR_WEIGHT = 0.15

# Sensibilidade à pressão de fila (escrita replica contenção)
READ_QUEUE_WEIGHT = 0.4
WRITE_QUEUE_WEIGHT = 0.6

# Multiplicador de cauda calibrado (não derivado de distribuição)
P95_WRITE_MULTIPLIER = 1.35


@dataclass(frozen=True)
class LatencyEstimate:
    """Métricas derivadas de uma configuração válida."""

    # Fatores do modelo
    write_fanout_factor: float
    queue_factor: float
    block_factor: float

    # Demanda agregada
    total_iops: float
    total_drives: int
    iops_per_drive: float

    # Componentes (µs)
    device_latency_us: float
    fabric_overhead_us: float
    write_fanout_us: float

    # Latências (µs)
    read_latency_us: float
    write_latency_us: float
    p95_write_latency_us: float

    @property
    def queue_pressure_pct(self) -> float:
        return self.queue_factor * 100


def write_fanout_factor(redundancy_scheme: str, ftt: int) -> float:
    """
    Retorna quantas vezes uma escrita é replicada/codificada no fabric.

    Apenas mirror escala com FTT; RAID-5/6 usam overhead fixo de EC.
    Esquema desconhecido resulta em 1.0.
    """
    if redundancy_scheme == SCHEME_MIRROR:
        return ftt + 1
    if redundancy_scheme == SCHEME_RAID5:
        return RAID5_WRITE_FACTOR
    if redundancy_scheme == SCHEME_RAID6:
        return RAID6_WRITE_FACTOR
    return 1.0


def calc_queue_factor(total_iops: float, total_drives: int) -> float:
    """Pressão de fila por device relativa ao ponto de saturação, limitada a 2.0."""
    iops_per_drive = total_iops / total_drives
    return min(iops_per_drive / DEVICE_SATURATION_IOPS, QUEUE_FACTOR_CAP)


def calc_block_factor(block_size_kib: float) -> float:
    """Amplificação por block size (crescente, com retorno decrescente)."""
    return math.log2(block_size_kib / BLOCK_BASE_KIB + 1) * BLOCK_FACTOR_WEIGHT


def calc_latency_estimate(config: ClusterConfig) -> LatencyEstimate:
    """
    Calcula o perfil de latência de uma configuração.

    Deve ser chamada apenas para configurações sem diagnósticos Error
    (hosts e drives_per_host > 0 são garantidos pelos guardrails).

    Args:
        config: Configuração de cluster validada

    Returns:
        LatencyEstimate com fatores, componentes e latências em µs
    """
    fanout = write_fanout_factor(config.redundancy_scheme, config.ftt)

    total_iops = config.vm_count * config.iops_per_vm
    total_drives = config.hosts * config.drives_per_host

    queue_factor = calc_queue_factor(total_iops, total_drives)
    block_factor = calc_block_factor(config.block_size_kib)

    base_us = config.device_latency_us + config.fabric_overhead_us
    fanout_us = config.network_rtt_us * fanout

    read_us = base_us * (1 + queue_factor * READ_QUEUE_WEIGHT + block_factor)
    write_us = (base_us + fanout_us) * (1 + queue_factor * WRITE_QUEUE_WEIGHT + block_factor)

    return LatencyEstimate(
        write_fanout_factor=fanout,
        queue_factor=queue_factor,
        block_factor=block_factor,
        total_iops=total_iops,
        total_drives=total_drives,
        iops_per_drive=total_iops / total_drives,
        device_latency_us=config.device_latency_us,
        fabric_overhead_us=config.fabric_overhead_us,
        write_fanout_us=fanout_us,
        read_latency_us=read_us,
        write_latency_us=write_us,
        p95_write_latency_us=write_us * P95_WRITE_MULTIPLIER,
    )


def latency_estimate_to_dict(le: LatencyEstimate) -> Dict[str, Any]:
    """Converte LatencyEstimate para dict serializável em JSON."""
    return {
        "factors": {
            "write_fanout_factor": le.write_fanout_factor,
            "queue_factor": round(le.queue_factor, 4),
            "block_factor": round(le.block_factor, 4),
        },
        "demand": {
            "total_iops": le.total_iops,
            "total_drives": le.total_drives,
            "iops_per_drive": round(le.iops_per_drive, 1),
        },
        "breakdown_us": {
            "device_latency_us": le.device_latency_us,
            "fabric_overhead_us": le.fabric_overhead_us,
            "write_fanout_us": round(le.write_fanout_us, 1),
            "queue_pressure_pct": round(le.queue_pressure_pct, 1),
        },
        "latency_us": {
            "read": round(le.read_latency_us, 1),
            "write": round(le.write_latency_us, 1),
            "p95_write": round(le.p95_write_latency_us, 1),
        },
    }
