"""
Validação de configurações de cluster (guardrails) e de schema do clusters.json.

Dois níveis:
  - Guardrails de cluster: regras de política aplicadas ao vetor de entrada.
    Regras "hard" geram diagnósticos Error (bloqueiam a estimativa);
    regras "soft" geram Warning (não bloqueiam).
  - Schema: estrutura e tipos dos perfis carregados de clusters.json.
"""

from dataclasses import dataclass
from typing import Dict, Any, List, Tuple

from .cluster import ClusterConfig, SCHEME_MIRROR, SCHEME_RAID5, SCHEME_RAID6
from .schemas import CLUSTER_SCHEMA


SEVERITY_ERROR = "Error"
SEVERITY_WARNING = "Warning"


@dataclass(frozen=True)
class Diagnostic:
    """Diagnóstico emitido por uma regra de validação."""

    severity: str  # "Error" | "Warning"
    message: str


def validate_cluster(config: ClusterConfig) -> List[Diagnostic]:
    """
    Aplica todas as regras de política a uma configuração de cluster.

    Cada regra é avaliada de forma independente (todas as aplicáveis
    disparam). A ordem da lista retornada é fixa: primeiro as regras hard,
    depois as soft, cada grupo na ordem em que aparece abaixo.

    Args:
        config: Configuração de cluster a validar

    Returns:
        Lista ordenada de diagnósticos (vazia se a configuração é limpa)
    """
    diagnostics: List[Diagnostic] = []

    def error(message: str) -> None:
        diagnostics.append(Diagnostic(SEVERITY_ERROR, message))

    def warning(message: str) -> None:
        diagnostics.append(Diagnostic(SEVERITY_WARNING, message))

    # ------------------------------------------------------------------
    # Limites hard (interrompem o cálculo)
    # ------------------------------------------------------------------
    # Faixas escritas como "not (lo <= x <= hi)": NaN fica fora da faixa
    if not (3 <= config.hosts <= 64):
        error("vSAN ESA clusters must have between 3 and 64 hosts.")

    if not (1 <= config.drives_per_host <= 24):
        error("NVMe drives per host must be between 1 and 24.")

    if not (1 <= config.vm_count <= 10000):
        error("VM count must be between 1 and 10,000 per cluster.")

    if not (8 <= config.block_size_kib <= 1024):
        error("Block size must be between 8 KB and 1 MB.")

    if not (1 <= config.ftt <= 3):
        error("FTT must be between 1 and 3.")

    # Política de disponibilidade
    if config.redundancy_scheme == SCHEME_RAID5 and config.hosts < 4:
        error("RAID-5 requires a minimum of 4 hosts.")

    if config.redundancy_scheme == SCHEME_RAID6 and config.hosts < 6:
        error("RAID-6 requires a minimum of 6 hosts.")

    if config.ftt == 3 and config.redundancy_scheme == SCHEME_RAID5:
        error("FTT=3 is not supported with RAID-5.")

    # ------------------------------------------------------------------
    # Avisos de design (não bloqueiam)
    # ------------------------------------------------------------------
    if not (1 <= config.iops_per_vm <= 10000):
        warning("IOPS per VM is unusually high; verify workload realism.")

    if config.ftt == 3 and config.redundancy_scheme == SCHEME_MIRROR:
        warning("FTT=3 with mirroring significantly increases write latency and network traffic.")

    if config.vms_per_host > 200:
        warning("VM density per host is high; tail latency may increase.")

    if config.drives_per_host < 4:
        warning("Less than 4 NVMe drives per host reduces parallelism and increases queue depth.")

    if config.hosts <= config.ftt + 1:
        warning("Minimal host count for selected FTT reduces operational headroom.")

    if config.network_rtt_us > 300:
        warning("High network RTT will directly impact ESA write latency.")

    return diagnostics


def errors_of(diagnostics: List[Diagnostic]) -> List[str]:
    """Mensagens de severidade Error, na ordem original."""
    return [d.message for d in diagnostics if d.severity == SEVERITY_ERROR]


def warnings_of(diagnostics: List[Diagnostic]) -> List[str]:
    """Mensagens de severidade Warning, na ordem original."""
    return [d.message for d in diagnostics if d.severity == SEVERITY_WARNING]


def has_errors(diagnostics: List[Diagnostic]) -> bool:
    return any(d.severity == SEVERITY_ERROR for d in diagnostics)


# ============================================================================
# Validação de schema (clusters.json)
# ============================================================================

def validate_object(
    obj: Dict[str, Any],
    schema: Dict[str, Any],
    obj_type: str,
    obj_name: str = "unknown"
) -> List[str]:
    """
    Valida um objeto contra um schema.

    Args:
        obj: Objeto a validar (dict do JSON)
        schema: Schema de referência
        obj_type: Tipo do objeto (ex: "cluster")
        obj_name: Nome do objeto (para mensagens de erro)

    Returns:
        Lista de erros (vazia se válido)
    """
    errors = []

    # 1. Campos obrigatórios e tipos
    for field, expected_type in schema["required"].items():
        if field not in obj:
            errors.append(
                f"[{obj_type}:{obj_name}] Campo obrigatório ausente: '{field}'. "
                f"Atualize o JSON ou forneça override via CLI."
            )
        elif not _check_type(obj[field], expected_type):
            errors.append(
                f"[{obj_type}:{obj_name}] Campo '{field}' tem tipo inválido. "
                f"Esperado: {_type_to_str(expected_type)}, Recebido: {type(obj[field]).__name__}"
            )

    # 2. Campos opcionais (se presentes)
    for field, expected_type in schema.get("optional", {}).items():
        if field in obj and not _check_type(obj[field], expected_type):
            errors.append(
                f"[{obj_type}:{obj_name}] Campo opcional '{field}' tem tipo inválido. "
                f"Esperado: {_type_to_str(expected_type)}, Recebido: {type(obj[field]).__name__}"
            )

    # 3. Enums (case-insensitive)
    for field, valid_values in schema.get("enums", {}).items():
        value = obj.get(field)
        if isinstance(value, str) and value.lower() not in [v.lower() for v in valid_values]:
            errors.append(
                f"[{obj_type}:{obj_name}] Campo '{field}' tem valor inválido: '{value}'. "
                f"Valores aceitos: {', '.join(valid_values)}"
            )

    # 4. Constraints
    for constraint in schema.get("constraints", []):
        try:
            if not constraint["check"](obj):
                errors.append(
                    f"[{obj_type}:{obj_name}] Constraint '{constraint['name']}' falhou: "
                    f"{constraint['error']}"
                )
        except TypeError as e:
            errors.append(
                f"[{obj_type}:{obj_name}] Erro ao validar constraint '{constraint['name']}': {str(e)}"
            )

    return errors


def _check_type(value: Any, expected_type: Any) -> bool:
    """
    Verifica se value tem o tipo esperado.

    Suporta tipos simples (str, int, float) e tuplas de tipos alternativos.
    bool é rejeitado onde se espera número.
    """
    if isinstance(expected_type, tuple):
        return any(_check_type(value, t) for t in expected_type)
    if isinstance(value, bool) and expected_type is not bool:
        return False
    return isinstance(value, expected_type)


def _type_to_str(expected_type: Any) -> str:
    """Converte tipo esperado para string legível."""
    if isinstance(expected_type, tuple):
        return " | ".join(_type_to_str(t) for t in expected_type)
    if expected_type is type(None):
        return "null"
    return expected_type.__name__


def validate_cluster_profiles(profiles: List[Dict[str, Any]]) -> Tuple[List[str], List[str]]:
    """
    Valida lista de perfis de cluster.

    Além do schema, roda os guardrails de política em cada perfil
    estruturalmente válido: Errors de política viram warnings de arquivo
    (o perfil pode existir, mas não será estimado).

    Returns:
        (erros, warnings)
    """
    errors = []
    warnings = []

    names = [p.get("name", "").lower() for p in profiles]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        errors.append(
            f"[clusters.json] Nomes duplicados encontrados: {', '.join(duplicates)}. "
            "Cada cluster deve ter um nome único."
        )

    for profile in profiles:
        profile_name = profile.get("name", "unknown")
        profile_errors = validate_object(profile, CLUSTER_SCHEMA, "cluster", profile_name)
        errors.extend(profile_errors)
        if profile_errors:
            continue

        for diagnostic in validate_cluster(ClusterConfig.from_dict(profile)):
            warnings.append(f"[cluster:{profile_name}] {diagnostic.severity}: {diagnostic.message}")

    return errors, warnings


def print_validation_report(errors: List[str], warnings: List[str]) -> bool:
    """
    Imprime relatório de validação.

    Returns:
        True se validação passou (sem erros), False caso contrário
    """
    print("\n" + "=" * 100)
    print("VALIDAÇÃO DE SCHEMAS E GUARDRAILS")
    print("=" * 100)

    if warnings:
        print(f"\n⚠️  {len(warnings)} WARNING(S):")
        for i, warning in enumerate(warnings, 1):
            print(f"  {i}. {warning}")

    if errors:
        print(f"\n❌ {len(errors)} ERRO(S) ENCONTRADO(S):")
        for i, error in enumerate(errors, 1):
            print(f"  {i}. {error}")
        print("\n" + "=" * 100)
        print("❌ VALIDAÇÃO FALHOU")
        print("=" * 100 + "\n")
        return False

    if not warnings:
        print("\n✅ Todos os perfis de cluster são válidos.")
    else:
        print("\n✅ Validação passou (com warnings).")
    print("=" * 100 + "\n")
    return True
