"""
Writer: grava os relatórios de sizing (txt, json, md) em disco.

Nome dos arquivos: <tipo>_<cluster>_<timestamp>.<ext>, com o nome do
cluster reduzido a [a-z0-9_-] para poder vir de perfis com espaços ou barras.
"""

import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict


def safe_cluster_name(name: str) -> str:
    """Normaliza o nome do perfil para uso em nome de arquivo."""
    slug = re.sub(r"[^a-z0-9_-]+", "-", name.lower()).strip("-")
    return slug or "custom"


class ReportWriter:
    """Grava relatórios de um cluster em um diretório de saída."""

    def __init__(self, base_dir: str = "relatorios"):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        # Um timestamp por execução: txt, json e md do mesmo run ficam pareados
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    def report_path(self, kind: str, cluster_name: str, extension: str) -> Path:
        return self.base_dir / f"{kind}_{safe_cluster_name(cluster_name)}_{self.timestamp}.{extension}"

    def write_text_report(self, content: str, cluster_name: str) -> Path:
        return self._write(self.report_path("sizing", cluster_name, "txt"), content)

    def write_json_report(self, data: Dict[str, Any], cluster_name: str) -> Path:
        content = json.dumps(data, indent=2, ensure_ascii=False)
        return self._write(self.report_path("sizing", cluster_name, "json"), content)

    def write_executive_report(self, content: str, cluster_name: str) -> Path:
        return self._write(self.report_path("executive", cluster_name, "md"), content)

    @staticmethod
    def _write(path: Path, content: str) -> Path:
        path.write_text(content, encoding='utf-8')
        return path
