"""
Carregador de perfis de cluster (clusters.json) com validação de schema.
"""

import json
from pathlib import Path
from typing import Dict, List, Any, Optional

from .cluster import ClusterConfig
from .validator import validate_cluster_profiles


class ConfigLoader:
    """Carrega e gerencia perfis de cluster nomeados com validação."""

    def __init__(self, base_path: str = ".", validate: bool = True):
        """
        Args:
            base_path: Caminho base para os arquivos JSON
            validate: Se True, valida schema ao carregar
        """
        self.base_path = Path(base_path)
        self.validate = validate

        # Cache
        self._clusters: Dict[str, ClusterConfig] = {}
        self._loaded_from: Optional[str] = None

        # Dados brutos para validação
        self._clusters_data: List[Dict[str, Any]] = []

    def load_clusters(self, filepath: str = "clusters.json") -> Dict[str, ClusterConfig]:
        """Carrega perfis de cluster do JSON."""
        path = self.base_path / filepath

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(
                f"❌ Arquivo de clusters não encontrado: {path}\n"
                "Certifique-se de que clusters.json existe no diretório ou informe --clusters-file."
            )
        except json.JSONDecodeError as e:
            raise ValueError(f"❌ Erro ao parsear {path}: {e}")

        profiles = data.get("clusters", []) if isinstance(data, dict) else None
        if not isinstance(profiles, list) or not all(isinstance(p, dict) for p in profiles):
            raise ValueError(
                f"❌ Estrutura inválida em {path}: esperado objeto com a lista 'clusters' "
                '(ex: {"clusters": [{...}]}).'
            )

        self._clusters_data = profiles

        if self.validate:
            errors, _ = validate_cluster_profiles(self._clusters_data)
            if errors:
                error_msg = "\n".join(errors)
                raise ValueError(f"❌ Erros de validação em {filepath}:\n{error_msg}")

        clusters = {}
        for c in self._clusters_data:
            clusters[c["name"].lower()] = ClusterConfig.from_dict(c)

        self._clusters = clusters
        self._loaded_from = filepath
        return clusters

    def get_cluster(self, name: str) -> ClusterConfig:
        """Busca perfil de cluster por nome (case-insensitive)."""
        if self._loaded_from is None:
            self.load_clusters()

        name_normalized = name.lower()
        if name_normalized not in self._clusters:
            available = ", ".join(self._clusters.keys())
            raise ValueError(
                f"❌ Cluster '{name}' não encontrado em {self._loaded_from}.\n"
                f"Clusters disponíveis: {available}"
            )
        return self._clusters[name_normalized]

    def get_raw_data(self) -> List[Dict[str, Any]]:
        """Retorna dados brutos (não parseados) para validação."""
        return self._clusters_data
