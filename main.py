#!/usr/bin/env python3
"""
Sizing de Clusters HCI (vSAN ESA): guardrails + estimativa de latência.

Entrypoint principal do sistema modular.
"""

import json
import sys
from typing import List, Optional

from hci_sizing.cli import parse_cli_args, build_cluster_config
from hci_sizing.config_loader import ConfigLoader
from hci_sizing.engine import evaluate
from hci_sizing.calc_scenarios import compare_schemes
from hci_sizing.validator import validate_cluster_profiles, print_validation_report, warnings_of
from hci_sizing.report_full import format_full_report, format_json_report
from hci_sizing.report_exec import format_exec_summary, format_executive_markdown
from hci_sizing.writer import ReportWriter


def main(argv: Optional[List[str]] = None) -> int:
    """Função principal: orquestra todo o fluxo de sizing."""

    config = None
    try:
        # 1. Parse CLI
        config = parse_cli_args(argv)

        # 2. Se --validate-only, executar apenas validação do clusters.json
        if config.validate_only:
            print("\n" + "=" * 100)
            print("MODO DE VALIDACAO: Validando schema e guardrails de clusters.json")
            print("=" * 100 + "\n")

            loader = ConfigLoader(base_path=".", validate=False)
            loader.load_clusters(config.clusters_file)
            errors, warnings = validate_cluster_profiles(loader.get_raw_data())
            success = print_validation_report(errors, warnings)
            return 0 if success else 1

        # 3. Montar configuração do cluster
        base = None
        if config.profile_name:
            if config.verbose:
                print(f"Carregando perfil '{config.profile_name}' de {config.clusters_file}...")
            loader = ConfigLoader(base_path=".", validate=True)
            loader.load_clusters(config.clusters_file)
            base = loader.get_cluster(config.profile_name)

        cluster = build_cluster_config(config.cluster_overrides, base)
        cluster_name = config.profile_name or "custom"

        if config.verbose:
            source = f"perfil {config.profile_name}" if base else "defaults"
            print(f"   Base: {source}")
            if config.cluster_overrides:
                overrides = ", ".join(f"{k}={v}" for k, v in config.cluster_overrides.items())
                print(f"   Overrides (CLI): {overrides}")

        # 4. Avaliar
        if config.verbose:
            print("Avaliando guardrails e modelo de performance...")

        evaluation = evaluate(cluster)
        scenarios = compare_schemes(cluster) if config.compare_schemes else None

        if config.verbose:
            print("Gerando relatorios...")

        report_json = format_json_report(cluster, evaluation, scenarios, config.profile_name)

        if config.json_only:
            print(json.dumps(report_json, indent=2, ensure_ascii=False))
            return 0 if evaluation.is_valid else 1

        report_text = format_full_report(cluster, evaluation, scenarios, config.profile_name)

        text_path = json_path = exec_path = None
        if not config.no_write:
            writer = ReportWriter(config.output_dir)
            text_path = writer.write_text_report(report_text, cluster_name)
            json_path = writer.write_json_report(report_json, cluster_name)

            if config.executive_report:
                if config.verbose:
                    print("Gerando relatorio executivo...")
                exec_markdown = format_executive_markdown(
                    cluster, evaluation, scenarios, config.profile_name
                )
                exec_path = writer.write_executive_report(exec_markdown, cluster_name)

        print(format_exec_summary(
            cluster,
            evaluation,
            text_report_path=str(text_path) if text_path else None,
            json_report_path=str(json_path) if json_path else None
        ))

        if exec_path:
            print(f"   Executive: {exec_path}")
            print()

        if config.verbose and evaluation.is_valid and warnings_of(evaluation.diagnostics):
            print(f"\n{len(warnings_of(evaluation.diagnostics))} warning(s) forcaram o status Warning.")

        return 0 if evaluation.is_valid else 1

    except KeyboardInterrupt:
        print("\n\nOperacao cancelada pelo usuario.")
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"\nERRO: {e}", file=sys.stderr)
        if config is not None and config.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
