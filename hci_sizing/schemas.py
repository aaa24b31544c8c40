"""
Schema de validação para clusters.json.

Define estrutura, tipos, campos obrigatórios e constraints de validação
dos perfis de cluster. Faixas de política (hosts, FTT, block size...) NÃO
são verificadas aqui: elas pertencem ao validator de cluster, que as reporta
como diagnósticos em vez de rejeitar o arquivo.
"""

from .cluster import REDUNDANCY_SCHEMES

# ============================================================================
# CLUSTER SCHEMA
# ============================================================================

CLUSTER_SCHEMA = {
    "required": {
        "name": str,
        "hosts": int,
        "drives_per_host": int,
        "ftt": int,
        "redundancy_scheme": str,
        "vm_count": int,
        "iops_per_vm": (int, float),
        "read_ratio": (int, float),
        "block_size_kib": (int, float),
        "device_latency_us": (int, float),
        "network_rtt_us": (int, float),
        "fabric_overhead_us": (int, float),
    },
    "optional": {
        "notes": str,
    },
    "enums": {
        "redundancy_scheme": REDUNDANCY_SCHEMES,
    },
    "constraints": [
        {
            "name": "read_ratio_range",
            "check": lambda c: 0.0 <= c.get("read_ratio", 0.0) <= 1.0,
            "error": "read_ratio must be between 0.0 and 1.0 (ex: 0.70 for 70% reads)"
        },
        {
            "name": "non_negative_latencies",
            "check": lambda c: all([
                c.get("device_latency_us", 0) >= 0,
                c.get("network_rtt_us", 0) >= 0,
                c.get("fabric_overhead_us", 0) >= 0,
            ]),
            "error": "Latency parameters (device_latency_us, network_rtt_us, fabric_overhead_us) must be >= 0"
        },
    ]
}
