"""
Definição da configuração de cluster HCI (topologia, workload e fabric).
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Any


# Esquemas de redundância suportados
SCHEME_MIRROR = "mirror"
SCHEME_RAID5 = "raid5"
SCHEME_RAID6 = "raid6"

REDUNDANCY_SCHEMES = [SCHEME_MIRROR, SCHEME_RAID5, SCHEME_RAID6]


@dataclass
class ClusterConfig:
    """
    Vetor de entrada de uma avaliação de sizing.

    Criado pelo chamador, usado em uma única avaliação e descartado.
    Nenhum campo é validado aqui: faixas e políticas são responsabilidade
    do validator, que as reporta como diagnósticos.
    """

    # Topologia
    hosts: int
    drives_per_host: int
    ftt: int
    redundancy_scheme: str  # "mirror", "raid5", "raid6"

    # Workload
    vm_count: int
    iops_per_vm: float
    read_ratio: float       # 0.0 a 1.0
    block_size_kib: float

    # Fabric (µs)
    device_latency_us: float
    network_rtt_us: float
    fabric_overhead_us: float

    @property
    def vms_per_host(self) -> float:
        """Densidade de VMs por host (infinita com zero hosts e VMs presentes)."""
        if self.hosts == 0:
            return math.inf if self.vm_count > 0 else 0.0
        return self.vm_count / self.hosts

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClusterConfig":
        """Cria configuração a partir de um perfil JSON (campos extras ignorados)."""
        return cls(
            hosts=data["hosts"],
            drives_per_host=data["drives_per_host"],
            ftt=data["ftt"],
            redundancy_scheme=data["redundancy_scheme"].lower(),
            vm_count=data["vm_count"],
            iops_per_vm=data["iops_per_vm"],
            read_ratio=data["read_ratio"],
            block_size_kib=data["block_size_kib"],
            device_latency_us=data["device_latency_us"],
            network_rtt_us=data["network_rtt_us"],
            fabric_overhead_us=data["fabric_overhead_us"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Valores padrão quando nenhum perfil é informado na CLI
DEFAULT_CLUSTER: Dict[str, Any] = {
    "hosts": 6,
    "drives_per_host": 6,
    "ftt": 1,
    "redundancy_scheme": SCHEME_MIRROR,
    "vm_count": 300,
    "iops_per_vm": 100,
    "read_ratio": 0.7,
    "block_size_kib": 32,
    "device_latency_us": 100,
    "network_rtt_us": 50,
    "fabric_overhead_us": 20,
}
