#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
test_hci_sizing.py - Testes do sistema de sizing de clusters HCI
"""

import json
import math
from dataclasses import replace

import pytest

from hci_sizing.cluster import ClusterConfig, DEFAULT_CLUSTER
from hci_sizing.engine import evaluate, evaluation_to_dict
from hci_sizing.validator import (
    Diagnostic, SEVERITY_ERROR, SEVERITY_WARNING,
    validate_cluster, validate_cluster_profiles, errors_of, warnings_of,
)
from hci_sizing.calc_latency import write_fanout_factor, calc_latency_estimate
from hci_sizing.calc_health import (
    classify_health, HEALTH_GOOD, HEALTH_ACCEPTABLE, HEALTH_AT_RISK, HEALTH_WARNING,
    GOOD_MESSAGE, ACCEPTABLE_MESSAGE, AT_RISK_MESSAGE,
)
from hci_sizing.calc_scenarios import compare_schemes
from hci_sizing.config_loader import ConfigLoader
from hci_sizing.cli import parse_cli_args, build_cluster_config
from hci_sizing.report_full import format_full_report, format_json_report, format_ms
from hci_sizing.report_exec import format_exec_summary, format_executive_markdown
from hci_sizing.writer import ReportWriter, safe_cluster_name
import main as sizing_main


HOSTS_ERROR = "vSAN ESA clusters must have between 3 and 64 hosts."
DRIVES_ERROR = "NVMe drives per host must be between 1 and 24."
VMS_ERROR = "VM count must be between 1 and 10,000 per cluster."
BLOCK_ERROR = "Block size must be between 8 KB and 1 MB."
FTT_ERROR = "FTT must be between 1 and 3."
RAID5_HOSTS_ERROR = "RAID-5 requires a minimum of 4 hosts."
RAID6_HOSTS_ERROR = "RAID-6 requires a minimum of 6 hosts."
FTT3_RAID5_ERROR = "FTT=3 is not supported with RAID-5."

IOPS_WARNING = "IOPS per VM is unusually high; verify workload realism."
FTT3_MIRROR_WARNING = "FTT=3 with mirroring significantly increases write latency and network traffic."
DENSITY_WARNING = "VM density per host is high; tail latency may increase."
DRIVES_WARNING = "Less than 4 NVMe drives per host reduces parallelism and increases queue depth."
HEADROOM_WARNING = "Minimal host count for selected FTT reduces operational headroom."
RTT_WARNING = "High network RTT will directly impact ESA write latency."


def make_cluster(**overrides) -> ClusterConfig:
    """Cluster de referência limpo (sem diagnósticos) com overrides."""
    fields = dict(
        hosts=8,
        drives_per_host=6,
        ftt=1,
        redundancy_scheme="mirror",
        vm_count=400,
        iops_per_vm=50,
        read_ratio=0.7,
        block_size_kib=32,
        device_latency_us=100,
        network_rtt_us=50,
        fabric_overhead_us=20,
    )
    fields.update(overrides)
    return ClusterConfig(**fields)


# ============================================================================
# Guardrails
# ============================================================================

class TestValidator:

    @pytest.mark.parametrize("hosts", [-1, 0, 1, 2, 65, 100])
    def test_hosts_out_of_range_blocks_estimate(self, hosts):
        evaluation = evaluate(make_cluster(hosts=hosts))
        assert evaluation.result is None
        assert HOSTS_ERROR in errors_of(evaluation.diagnostics)

    @pytest.mark.parametrize("hosts", [3, 64])
    def test_hosts_range_is_inclusive(self, hosts):
        diagnostics = validate_cluster(make_cluster(hosts=hosts))
        assert HOSTS_ERROR not in errors_of(diagnostics)

    def test_hosts_below_minimum(self):
        evaluation = evaluate(make_cluster(hosts=2))
        assert evaluation.result is None
        assert evaluation.diagnostics[0] == Diagnostic(SEVERITY_ERROR, HOSTS_ERROR)
        assert "between 3 and 64" in evaluation.diagnostics[0].message
        assert errors_of(evaluation.diagnostics) == [HOSTS_ERROR]

    def test_raid5_minimum_hosts(self):
        evaluation = evaluate(make_cluster(hosts=3, redundancy_scheme="raid5"))
        assert evaluation.result is None
        assert evaluation.diagnostics == [Diagnostic(SEVERITY_ERROR, RAID5_HOSTS_ERROR)]

    def test_raid6_minimum_hosts(self):
        evaluation = evaluate(make_cluster(hosts=5, redundancy_scheme="raid6"))
        assert evaluation.result is None
        assert errors_of(evaluation.diagnostics) == [RAID6_HOSTS_ERROR]

        assert evaluate(make_cluster(hosts=6, redundancy_scheme="raid6")).result is not None

    def test_ftt3_raid5_unsupported(self):
        diagnostics = validate_cluster(make_cluster(ftt=3, redundancy_scheme="raid5"))
        assert errors_of(diagnostics) == [FTT3_RAID5_ERROR]

    def test_clean_config_has_no_diagnostics(self):
        assert validate_cluster(make_cluster()) == []

    def test_all_errors_then_warnings_in_rule_order(self):
        config = make_cluster(
            hosts=2, drives_per_host=0, vm_count=0, block_size_kib=4,
            ftt=3, redundancy_scheme="raid5", iops_per_vm=0, network_rtt_us=400,
        )
        diagnostics = validate_cluster(config)

        assert diagnostics == [
            Diagnostic(SEVERITY_ERROR, HOSTS_ERROR),
            Diagnostic(SEVERITY_ERROR, DRIVES_ERROR),
            Diagnostic(SEVERITY_ERROR, VMS_ERROR),
            Diagnostic(SEVERITY_ERROR, BLOCK_ERROR),
            Diagnostic(SEVERITY_ERROR, RAID5_HOSTS_ERROR),
            Diagnostic(SEVERITY_ERROR, FTT3_RAID5_ERROR),
            Diagnostic(SEVERITY_WARNING, IOPS_WARNING),
            Diagnostic(SEVERITY_WARNING, DRIVES_WARNING),
            Diagnostic(SEVERITY_WARNING, HEADROOM_WARNING),
            Diagnostic(SEVERITY_WARNING, RTT_WARNING),
        ]

    def test_ftt_and_raid6_errors(self):
        config = make_cluster(hosts=4, ftt=0, redundancy_scheme="raid6")
        assert errors_of(validate_cluster(config)) == [FTT_ERROR, RAID6_HOSTS_ERROR]

    def test_all_warnings_in_rule_order(self):
        config = make_cluster(
            hosts=4, drives_per_host=2, ftt=3, redundancy_scheme="mirror",
            vm_count=1000, iops_per_vm=20000, block_size_kib=8, network_rtt_us=301,
        )
        evaluation = evaluate(config)
        expected = [
            IOPS_WARNING, FTT3_MIRROR_WARNING, DENSITY_WARNING,
            DRIVES_WARNING, HEADROOM_WARNING, RTT_WARNING,
        ]

        assert [d.severity for d in evaluation.diagnostics] == [SEVERITY_WARNING] * 6
        assert warnings_of(evaluation.diagnostics) == expected
        assert evaluation.result is not None
        assert evaluation.result.health_tier == HEALTH_WARNING
        assert evaluation.result.health_message == "\n".join(expected)

    def test_density_threshold_is_strict(self):
        assert DENSITY_WARNING not in warnings_of(validate_cluster(make_cluster(vm_count=1600)))
        assert DENSITY_WARNING in warnings_of(validate_cluster(make_cluster(vm_count=1601)))

    def test_rtt_threshold_is_strict(self):
        assert warnings_of(validate_cluster(make_cluster(network_rtt_us=300))) == []
        assert warnings_of(validate_cluster(make_cluster(network_rtt_us=300.5))) == [RTT_WARNING]

    def test_headroom_warning(self):
        assert warnings_of(validate_cluster(make_cluster(hosts=3, ftt=2))) == [HEADROOM_WARNING]
        assert warnings_of(validate_cluster(make_cluster(hosts=4, ftt=2))) == []

    def test_no_deduplication_across_severities(self):
        # hosts=2 dispara tanto o Error de faixa quanto o Warning de headroom
        diagnostics = validate_cluster(make_cluster(hosts=2))
        assert diagnostics == [
            Diagnostic(SEVERITY_ERROR, HOSTS_ERROR),
            Diagnostic(SEVERITY_WARNING, HEADROOM_WARNING),
        ]

    def test_nan_inputs_fall_outside_ranges(self):
        nan = float("nan")
        blocked = evaluate(make_cluster(block_size_kib=nan))
        assert blocked.result is None
        assert errors_of(blocked.diagnostics) == [BLOCK_ERROR]

        assert errors_of(validate_cluster(make_cluster(hosts=nan)))[0] == HOSTS_ERROR
        assert warnings_of(validate_cluster(make_cluster(iops_per_vm=nan))) == [IOPS_WARNING]


# ============================================================================
# Modelo de performance
# ============================================================================

class TestLatencyModel:

    def test_clean_baseline(self):
        evaluation = evaluate(make_cluster())
        assert evaluation.diagnostics == []
        r = evaluation.result

        fanout = 2
        queue = min(400 * 50 / (8 * 6) / 3000, 2.0)
        block = math.log2(32 / 8 + 1) * 0.15
        read = (100 + 20) * (1 + queue * 0.4 + block)
        write = (100 + 20 + 50 * fanout) * (1 + queue * 0.6 + block)

        assert r.estimate.write_fanout_factor == fanout
        assert r.read_latency_us == pytest.approx(read)
        assert r.write_latency_us == pytest.approx(write)
        assert r.write_fanout_us == pytest.approx(100)
        assert r.queue_pressure_pct == pytest.approx(queue * 100)

        expected_tier = HEALTH_GOOD if write < 2000 else HEALTH_ACCEPTABLE
        assert r.health_tier == expected_tier

    def test_fanout_factors(self):
        assert write_fanout_factor("mirror", 1) == 2
        assert write_fanout_factor("mirror", 2) == 3
        assert write_fanout_factor("mirror", 3) == 4
        assert write_fanout_factor("raid5", 1) == 1.33
        assert write_fanout_factor("raid6", 1) == 1.5
        assert write_fanout_factor("raid6", 2) == 1.5

    def test_erasure_coding_fanout_ignores_ftt(self):
        ftt1 = evaluate(make_cluster(redundancy_scheme="raid6", ftt=1)).result
        ftt2 = evaluate(make_cluster(redundancy_scheme="raid6", ftt=2)).result
        assert ftt1.write_latency_us == ftt2.write_latency_us

    def test_queue_factor_is_capped(self):
        # 100 VMs × 1000 IOPS / 4 drives = 25.000 IOPS/drive
        config = make_cluster(hosts=4, drives_per_host=1, vm_count=100, iops_per_vm=1000)
        r = evaluate(config).result
        assert r is not None
        assert r.estimate.queue_factor == 2.0
        assert r.queue_pressure_pct == 200.0

    def test_queue_factor_at_cap_boundary(self):
        # exatamente 6000 IOPS/drive
        estimate = calc_latency_estimate(make_cluster(hosts=4, drives_per_host=1, vm_count=24, iops_per_vm=1000))
        assert estimate.queue_factor == 2.0

    def test_block_factor_anchored_at_8k(self):
        estimate = calc_latency_estimate(make_cluster(block_size_kib=8))
        assert estimate.block_factor == pytest.approx(0.15)

    def test_block_factor_monotonic(self):
        sizes = [8, 16, 32, 64, 128, 512, 1024]
        factors = [calc_latency_estimate(make_cluster(block_size_kib=s)).block_factor for s in sizes]
        assert factors == sorted(factors)

    @pytest.mark.parametrize("overrides", [
        {},
        {"network_rtt_us": 0},
        {"redundancy_scheme": "raid5"},
        {"redundancy_scheme": "raid6", "ftt": 2},
        {"vm_count": 10000, "iops_per_vm": 5000},
        {"block_size_kib": 1024, "device_latency_us": 0, "fabric_overhead_us": 0},
    ])
    def test_write_never_faster_than_read(self, overrides):
        r = evaluate(make_cluster(**overrides)).result
        assert r is not None
        assert r.write_latency_us >= r.read_latency_us

    @pytest.mark.parametrize("overrides", [
        {},
        {"redundancy_scheme": "raid5", "block_size_kib": 64},
        {"ftt": 3, "network_rtt_us": 280, "vm_count": 9000},
    ])
    def test_p95_multiplier_exact(self, overrides):
        r = evaluate(make_cluster(**overrides)).result
        assert r.p95_write_latency_us == r.write_latency_us * 1.35

    def test_evaluate_is_idempotent(self):
        config = make_cluster(redundancy_scheme="raid5", vm_count=3000, network_rtt_us=320)
        assert evaluate(config) == evaluate(config)
        assert evaluation_to_dict(evaluate(config)) == evaluation_to_dict(evaluate(config))

    def test_evaluate_does_not_mutate_input(self):
        config = make_cluster()
        before = config.to_dict()
        evaluate(config)
        assert config.to_dict() == before


# ============================================================================
# Saúde
# ============================================================================

class TestHealth:

    def test_warning_overrides_good_latency(self):
        # 1700 VMs / 8 hosts = 212,5 VMs/host
        config = make_cluster(vm_count=1700, iops_per_vm=1, block_size_kib=8)
        r = evaluate(config).result
        assert r.write_latency_us < 2000
        assert r.health_tier == HEALTH_WARNING
        assert r.health_message == DENSITY_WARNING

    def test_acceptable_tier(self):
        r = evaluate(make_cluster(device_latency_us=1000, fabric_overhead_us=200,
                                  network_rtt_us=250, block_size_kib=8)).result
        assert 2000 <= r.write_latency_us < 5000
        assert r.health_tier == HEALTH_ACCEPTABLE
        assert r.health_message == ACCEPTABLE_MESSAGE

    def test_at_risk_tier(self):
        r = evaluate(make_cluster(device_latency_us=4000, fabric_overhead_us=200,
                                  network_rtt_us=250, block_size_kib=8)).result
        assert r.write_latency_us >= 5000
        assert r.health_tier == HEALTH_AT_RISK
        assert r.health_message == AT_RISK_MESSAGE

    def test_thresholds(self):
        assert classify_health(1999.9, []).tier == HEALTH_GOOD
        assert classify_health(1999.9, []).message == GOOD_MESSAGE
        assert classify_health(2000, []).tier == HEALTH_ACCEPTABLE
        assert classify_health(4999.9, []).tier == HEALTH_ACCEPTABLE
        assert classify_health(5000, []).tier == HEALTH_AT_RISK
        assert classify_health(100, ["a", "b"]).message == "a\nb"


# ============================================================================
# Comparativo de esquemas
# ============================================================================

class TestSchemeComparison:

    def test_order_and_selection(self):
        scenarios = compare_schemes(make_cluster(redundancy_scheme="raid5"))
        assert [s.scheme for s in scenarios] == ["mirror", "raid5", "raid6"]
        assert [s.selected for s in scenarios] == [False, True, False]

    def test_illegal_schemes_carry_errors(self):
        scenarios = compare_schemes(make_cluster(hosts=4))
        by_scheme = {s.scheme: s.evaluation for s in scenarios}
        assert by_scheme["mirror"].is_valid
        assert by_scheme["raid5"].is_valid
        assert not by_scheme["raid6"].is_valid
        assert errors_of(by_scheme["raid6"].diagnostics) == [RAID6_HOSTS_ERROR]

    def test_matches_direct_evaluation(self):
        config = make_cluster(hosts=10, ftt=2)
        for s in compare_schemes(config):
            assert s.evaluation == evaluate(replace(config, redundancy_scheme=s.scheme))

    def test_evaluations_are_not_hashable(self):
        # diagnostics é uma lista mutável
        with pytest.raises(TypeError):
            hash(evaluate(make_cluster()))
        with pytest.raises(TypeError):
            hash(compare_schemes(make_cluster())[0])


# ============================================================================
# Configuração (clusters.json e CLI)
# ============================================================================

def _profile(name, **overrides):
    profile = make_cluster(**overrides).to_dict()
    profile["name"] = name
    return profile


def _write_clusters(tmp_path, profiles):
    path = tmp_path / "clusters.json"
    path.write_text(json.dumps({"clusters": profiles}), encoding="utf-8")
    return path


class TestConfigLoader:

    def test_load_and_lookup_case_insensitive(self, tmp_path):
        _write_clusters(tmp_path, [_profile("Prod", hosts=12), _profile("lab", hosts=4)])
        loader = ConfigLoader(base_path=str(tmp_path))
        clusters = loader.load_clusters()

        assert set(clusters) == {"prod", "lab"}
        assert loader.get_cluster("PROD").hosts == 12
        assert loader.get_cluster("lab") == make_cluster(hosts=4)

    def test_unknown_cluster_lists_available(self, tmp_path):
        _write_clusters(tmp_path, [_profile("prod")])
        loader = ConfigLoader(base_path=str(tmp_path))
        loader.load_clusters()
        with pytest.raises(ValueError, match="Clusters disponíveis: prod"):
            loader.get_cluster("missing")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader(base_path=str(tmp_path)).load_clusters()

    def test_malformed_json(self, tmp_path):
        (tmp_path / "clusters.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Erro ao parsear"):
            ConfigLoader(base_path=str(tmp_path)).load_clusters()

    def test_empty_file_does_not_fall_back_to_default(self, tmp_path):
        path = _write_clusters(tmp_path, [])
        loader = ConfigLoader(base_path=".")
        assert loader.load_clusters(str(path)) == {}
        with pytest.raises(ValueError, match="não encontrado em"):
            loader.get_cluster("baseline")

    @pytest.mark.parametrize("content", ["[]", "42", "{\"clusters\": {}}", "{\"clusters\": [1]}"])
    def test_invalid_structure(self, tmp_path, content):
        (tmp_path / "clusters.json").write_text(content, encoding="utf-8")
        with pytest.raises(ValueError, match="Estrutura inválida"):
            ConfigLoader(base_path=str(tmp_path)).load_clusters()

    def test_schema_errors(self, tmp_path):
        bad = _profile("bad", redundancy_scheme="raid10")
        del bad["ftt"]
        _write_clusters(tmp_path, [bad, _profile("dup"), _profile("DUP")])

        with pytest.raises(ValueError) as exc:
            ConfigLoader(base_path=str(tmp_path)).load_clusters()
        message = str(exc.value)
        assert "Campo obrigatório ausente: 'ftt'" in message
        assert "valor inválido: 'raid10'" in message
        assert "Nomes duplicados encontrados: dup" in message

    def test_policy_violations_are_file_warnings(self):
        errors, warnings = validate_cluster_profiles([_profile("tiny", hosts=2)])
        assert errors == []
        assert warnings == [
            f"[cluster:tiny] Error: {HOSTS_ERROR}",
            f"[cluster:tiny] Warning: {HEADROOM_WARNING}",
        ]

    def test_scheme_is_normalized(self):
        profile = _profile("upper", redundancy_scheme="RAID6")
        assert ClusterConfig.from_dict(profile).redundancy_scheme == "raid6"


class TestCLI:

    def test_overrides_only_given_flags(self):
        config = parse_cli_args(["--hosts", "10", "--redundancy-scheme", "raid6", "--read-pct", "60"])
        assert config.cluster_overrides == {"hosts": 10, "redundancy_scheme": "raid6", "read_ratio": 0.6}
        assert config.profile_name is None
        assert config.clusters_file == "clusters.json"

    def test_build_from_defaults(self):
        cluster = build_cluster_config({"hosts": 10})
        assert cluster.hosts == 10
        assert cluster.ftt == DEFAULT_CLUSTER["ftt"]
        assert cluster.redundancy_scheme == DEFAULT_CLUSTER["redundancy_scheme"]

    def test_build_from_profile(self):
        cluster = build_cluster_config({"ftt": 2}, base=make_cluster(hosts=12))
        assert cluster == make_cluster(hosts=12, ftt=2)

    def test_read_pct_out_of_range(self):
        with pytest.raises(SystemExit):
            parse_cli_args(["--read-pct", "150"])

    def test_invalid_scheme_rejected(self):
        with pytest.raises(SystemExit):
            parse_cli_args(["--redundancy-scheme", "raid10"])

    @pytest.mark.parametrize("argv", [
        ["--block-size-kib", "nan"],
        ["--network-rtt-us", "inf"],
        ["--read-pct", "nan"],
    ])
    def test_non_finite_values_rejected(self, argv):
        with pytest.raises(SystemExit):
            parse_cli_args(argv)


# ============================================================================
# Relatórios e entrypoint
# ============================================================================

class TestReports:

    def test_full_report_valid(self):
        config = make_cluster()
        evaluation = evaluate(config)
        text = format_full_report(config, evaluation, compare_schemes(config), "baseline")

        assert "Perfil: baseline" in text
        assert "Nenhum guardrail violado" in text
        assert format_ms(evaluation.result.write_latency_us) in text
        assert "Rede × fan-out: 100 µs" in text
        assert "COMPARATIVO DE ESQUEMAS" in text
        assert "Status: Good" in text

    def test_full_report_invalid(self):
        config = make_cluster(hosts=2)
        text = format_full_report(config, evaluate(config))
        assert "Estimativa não calculada" in text
        assert HOSTS_ERROR in text
        assert HEADROOM_WARNING in text

    def test_format_ms(self):
        assert format_ms(1234.5) == "1.23 ms"
        assert format_ms(316) == "0.32 ms"

    def test_json_report_is_serializable(self):
        config = make_cluster(hosts=5)
        report = format_json_report(config, evaluate(config), compare_schemes(config))
        data = json.loads(json.dumps(report))

        assert data["inputs"]["hosts"] == 5
        assert data["evaluation"]["valid"] is True
        assert data["evaluation"]["result"]["health"]["tier"] == "Good"
        raid6 = data["scheme_comparison"][2]
        assert raid6["scheme"] == "raid6"
        assert raid6["evaluation"]["result"] is None
        assert raid6["evaluation"]["diagnostics"][0] == {"severity": "Error", "message": RAID6_HOSTS_ERROR}

    def test_exec_summary_and_markdown(self):
        config = make_cluster(vm_count=1700)
        evaluation = evaluate(config)
        summary = format_exec_summary(config, evaluation, "a.txt", "a.json")
        markdown = format_executive_markdown(config, evaluation, compare_schemes(config), "dense")

        assert "Configuration warnings:" in summary
        assert DENSITY_WARNING in summary
        assert "Texto: a.txt" in summary
        assert markdown.startswith("# Sizing de Cluster HCI - dense")
        assert f"- {DENSITY_WARNING}" in markdown
        assert "**RAID-1 (Mirror)**" in markdown

    def test_writer_sanitizes_cluster_name(self, tmp_path):
        writer = ReportWriter(str(tmp_path / "out"))
        path = writer.write_text_report("conteúdo", "Prod/A 1")

        assert path.parent == tmp_path / "out"
        assert path.name.startswith("sizing_prod-a-1_")
        assert path.read_text(encoding="utf-8") == "conteúdo"
        assert safe_cluster_name("..//") == "custom"

    def test_writer_pairs_outputs_by_timestamp(self, tmp_path):
        writer = ReportWriter(str(tmp_path))
        json_path = writer.write_json_report({"ok": True}, "lab")
        md_path = writer.write_executive_report("# lab", "lab")

        assert json.loads(json_path.read_text(encoding="utf-8")) == {"ok": True}
        assert md_path.name == f"executive_lab_{writer.timestamp}.md"


class TestMain:

    def test_json_only_invalid_exits_1(self, capsys):
        assert sizing_main.main(["--json-only", "--hosts", "2"]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data["evaluation"]["valid"] is False
        assert data["evaluation"]["result"] is None

    def test_writes_reports(self, tmp_path, capsys):
        out_dir = tmp_path / "out"
        code = sizing_main.main(["--output-dir", str(out_dir), "--executive-report", "--compare-schemes"])
        assert code == 0
        suffixes = sorted(p.suffix for p in out_dir.iterdir())
        assert suffixes == [".json", ".md", ".txt"]
        assert "RESUMO EXECUTIVO" in capsys.readouterr().out

    def test_profile_from_file(self, tmp_path, capsys):
        path = _write_clusters(tmp_path, [_profile("edge", hosts=3, ftt=2)])
        code = sizing_main.main(["--clusters-file", str(path), "--profile", "edge", "--json-only"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["profile"] == "edge"
        assert data["evaluation"]["result"]["health"]["tier"] == "Warning"

    def test_unknown_profile_reports_error(self, tmp_path, capsys):
        path = _write_clusters(tmp_path, [_profile("edge")])
        assert sizing_main.main(["--clusters-file", str(path), "--profile", "nope", "--no-write"]) == 1
        assert "ERRO:" in capsys.readouterr().err

    def test_empty_clusters_file_reports_error(self, tmp_path, capsys):
        path = _write_clusters(tmp_path, [])
        code = sizing_main.main(["--clusters-file", str(path), "--profile", "baseline", "--json-only"])
        assert code == 1
        assert "ERRO:" in capsys.readouterr().err

    def test_invalid_structure_reports_error(self, tmp_path, capsys):
        path = tmp_path / "clusters.json"
        path.write_text("[]", encoding="utf-8")
        assert sizing_main.main(["--clusters-file", str(path), "--profile", "baseline", "--no-write"]) == 1
        assert "Estrutura inválida" in capsys.readouterr().err

    def test_nan_block_size_rejected(self, capsys):
        with pytest.raises(SystemExit) as exc:
            sizing_main.main(["--json-only", "--block-size-kib", "nan"])
        assert exc.value.code == 2
        assert "valor não finito" in capsys.readouterr().err

    def test_validate_only(self, tmp_path, capsys):
        path = _write_clusters(tmp_path, [_profile("ok"), _profile("tiny", hosts=2)])
        assert sizing_main.main(["--validate-only", "--clusters-file", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Validação passou (com warnings)" in out
        assert f"[cluster:tiny] Error: {HOSTS_ERROR}" in out
