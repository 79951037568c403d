#!/usr/bin/env python3
"""
ironcarbon Unit Tests (v1.2.0)
==============================
  - boundaries.py: eight analytical curves + continuity
  - martensite.py: Ms / Koistinen-Marburger
  - solver.py: region tree, lever rule, normalization, quench override
  - properties.py: empirical properties + weldability
"""

import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest


# =============================================================================
# Boundary Curve Tests (boundaries.py)
# =============================================================================

class TestBoundaries:
    """boundaries.py のテスト"""

    def test_import(self):
        """インポートテスト"""
        from ironcarbon.boundaries import BOUNDARY_CURVES, EPS, list_curves

        assert EPS == 1e-5
        assert len(BOUNDARY_CURVES) == 8
        assert list_curves() == [
            "alpha", "a3", "acm", "solidus", "liquidus",
            "l_fe3c", "delta_solidus", "delta_liquidus",
        ]

    def test_anchor_values(self):
        """アンカー点の再現"""
        from ironcarbon.boundaries import (
            c_a3, c_acm, c_alpha, c_delta_liquidus, c_delta_solidus,
            c_l_fe3c, c_liquidus, c_solidus,
        )

        assert c_alpha(727) == pytest.approx(0.022)
        assert c_alpha(912) == pytest.approx(0.0)
        assert c_a3(727) == pytest.approx(0.76)
        assert c_a3(912) == pytest.approx(0.0)
        assert c_acm(727) == pytest.approx(0.76)
        assert c_acm(1147) == pytest.approx(2.11)
        assert c_solidus(1147) == pytest.approx(2.11)
        assert c_solidus(1495) == pytest.approx(0.17)
        assert c_liquidus(1147) == pytest.approx(4.3)
        assert c_liquidus(1495) == pytest.approx(0.53)
        assert c_l_fe3c(1147) == pytest.approx(4.3)
        assert c_l_fe3c(1250) == pytest.approx(6.67)
        assert c_delta_solidus(1495) == pytest.approx(0.09)
        assert c_delta_liquidus(1495) == pytest.approx(0.53)
        assert c_delta_liquidus(1538) == pytest.approx(0.0)

    def test_clamped_outside_band(self):
        """バンド外は定数"""
        from ironcarbon.boundaries import (
            c_a3, c_acm, c_alpha, c_delta_liquidus, c_delta_solidus,
            c_l_fe3c, c_liquidus, c_solidus,
        )

        assert c_alpha(1000) == 0.0
        assert c_a3(500) == 0.76 and c_a3(1000) == 0.76
        assert c_acm(300) == 0.76 and c_acm(1300) == 2.11
        assert c_solidus(900) == 2.11 and c_solidus(1520) == 0.17
        assert c_liquidus(900) == 4.3 and c_liquidus(1520) == 0.53
        assert c_l_fe3c(900) == 4.3 and c_l_fe3c(1400) == 6.67
        assert c_delta_solidus(1300) == 0.0 and c_delta_solidus(1600) == 0.0
        assert c_delta_liquidus(1400) == 0.0 and c_delta_liquidus(1600) == 0.0

    def test_power_law_exponents(self):
        """指数 p = 3, 1.2, 1.4, 0.85 を中点で確認"""
        from ironcarbon.boundaries import c_a3, c_acm, c_alpha, c_liquidus, c_solidus

        assert c_alpha(363.5) == pytest.approx(0.022 * 0.5 ** 3)
        assert c_a3(819.5) == pytest.approx(0.76 * 0.5 ** 1.2)
        assert c_acm(937.0) == pytest.approx(0.76 + 1.35 * 0.5 ** 1.4)
        assert c_solidus(1321.0) == pytest.approx(0.17 + 1.94 * 0.5 ** 0.85)
        assert c_liquidus(1321.0) == pytest.approx(0.53 + 3.77 * 0.5 ** 0.85)

    def test_monotonic_in_band(self):
        """有効バンド内で単調"""
        from ironcarbon.boundaries import c_a3, c_acm, c_liquidus, c_solidus

        T = np.linspace(727, 912, 50)
        assert np.all(np.diff([c_a3(t) for t in T]) <= 0)
        T = np.linspace(727, 1147, 50)
        assert np.all(np.diff([c_acm(t) for t in T]) >= 0)
        T = np.linspace(1147, 1495, 50)
        assert np.all(np.diff([c_solidus(t) for t in T]) <= 0)
        assert np.all(np.diff([c_liquidus(t) for t in T]) <= 0)

    def test_continuity_pairs(self):
        """隣接曲線がアンカー温度で一致"""
        from ironcarbon.boundaries import check_continuity

        report = check_continuity()
        assert len(report) == 6
        for row in report:
            assert row["ok"], f"{row['pair']} gap={row['gap']}"

    def test_a3_alpha_meet_at_912(self):
        from ironcarbon.boundaries import c_a3, c_alpha

        assert abs(c_a3(912) - c_alpha(912)) < 1e-3

    def test_curves_within_domain(self):
        """全曲線が [0, 6.67] に収まる"""
        from ironcarbon.boundaries import BOUNDARY_CURVES

        for name, fn in BOUNDARY_CURVES.items():
            for T in np.linspace(-100, 1700, 181):
                c = fn(float(T))
                assert 0.0 <= c <= 6.67, f"{name}({T}) = {c}"

    def test_get_curve(self):
        from ironcarbon.boundaries import c_a3, c_delta_liquidus, get_curve

        assert get_curve("a3") is c_a3
        assert get_curve("A3") is c_a3
        assert get_curve("c_a3") is c_a3
        assert get_curve("delta-liquidus") is c_delta_liquidus

    def test_get_curve_error(self):
        """存在しない曲線でKeyError"""
        from ironcarbon.boundaries import get_curve

        with pytest.raises(KeyError):
            get_curve("unobtanium")


# =============================================================================
# Martensite Tests (martensite.py)
# =============================================================================

class TestMartensite:
    """martensite.py のテスト"""

    def test_ms_temperature(self):
        from ironcarbon.martensite import ms_temperature

        assert ms_temperature(0.0) == 539.0
        assert ms_temperature(0.4) == pytest.approx(369.8)

    def test_km_fraction_above_ms(self):
        from ironcarbon.martensite import km_fraction

        assert km_fraction(300.0, 300.0) == 0.0
        assert km_fraction(300.0, 450.0) == 0.0

    def test_km_fraction_far_below(self):
        from ironcarbon.martensite import km_fraction

        fm = km_fraction(369.8, 0.0)
        assert fm == pytest.approx(1 - math.exp(-0.011 * 369.8))
        assert fm == pytest.approx(0.983, abs=1e-3)

    def test_temperature_at_fraction(self):
        from ironcarbon.martensite import km_fraction, temperature_at_fraction

        T50 = temperature_at_fraction(369.8, 0.5)
        assert T50 < 369.8
        assert km_fraction(369.8, T50) == pytest.approx(0.5)
        assert temperature_at_fraction(369.8, 0.0) is None
        assert temperature_at_fraction(369.8, 1.0) is None

    def test_quench_gate(self):
        from ironcarbon.martensite import is_quench

        assert not is_quench(0.4, 100, 10)
        assert is_quench(0.4, 100, 50)
        assert is_quench(0.4, 100, 150)
        assert not is_quench(2.5, 100, 150)
        assert not is_quench(0.4, 400, 150)


# =============================================================================
# Solver Tests (solver.py)
# =============================================================================

CARBON_GRID = np.concatenate([
    np.linspace(-1.0, 8.0, 37),
    [0.0, 0.022, 0.09, 0.17, 0.53, 0.76, 2.0, 2.11, 4.3, 6.67],
])
TEMP_GRID = np.concatenate([
    np.linspace(-50.0, 1700.0, 36),
    [0.0, 727.0, 768.0, 912.0, 1147.0, 1250.0, 1394.0, 1495.0, 1538.0],
])


class TestSolver:
    """solver.py のテスト"""

    def test_normalization_everywhere(self):
        """Σ frac = 100（境界上も含む）"""
        from ironcarbon.phases import REGION_IDS
        from ironcarbon.solver import get_state

        for rate in (0.0, 10.0, 150.0):
            for c in CARBON_GRID:
                for T in TEMP_GRID:
                    s = get_state(float(c), float(T), rate)
                    assert 1 <= len(s.fractions) <= 2
                    assert abs(sum(f.frac for f in s.fractions) - 100.0) < 1e-6
                    assert all(0.0 <= f.frac <= 100.0 + 1e-9 for f in s.fractions)
                    assert s.region_id in REGION_IDS

    def test_domain_saturation(self):
        """範囲外入力は飽和"""
        from ironcarbon.solver import get_state

        for T in (0.0, 500.0, 800.0, 1200.0, 1450.0, 1520.0):
            for r in (0.0, 150.0):
                assert get_state(-5, T, r).fractions == get_state(0, T, r).fractions
                assert get_state(10, T, r).fractions == get_state(6.67, T, r).fractions
        for c in (0.0, 0.4, 3.0):
            assert get_state(c, -40, 0).fractions == get_state(c, 0, 0).fractions

    def test_deterministic(self):
        from ironcarbon.solver import get_state

        assert get_state(0.45, 760.0, 0) == get_state(0.45, 760.0, 0)

    def test_thread_safe(self):
        """並行呼び出しでも同一結果"""
        from ironcarbon.solver import get_state

        points = [(c, T) for c in (0.1, 0.45, 1.2, 3.5) for T in (300, 750, 1200, 1500)]
        serial = [get_state(c, T, 0) for c, T in points]
        with ThreadPoolExecutor(max_workers=4) as pool:
            parallel = list(pool.map(lambda p: get_state(p[0], p[1], 0), points))
        assert serial == parallel

    def test_pure_ferrite(self):
        """C=0, 500°C → Ferrite 100%"""
        from ironcarbon.solver import get_state

        s = get_state(0, 500, 0)
        assert s.region_id == "alpha"
        assert len(s.fractions) == 1
        assert s.fractions[0].name == "Ferrite (α)"
        assert s.fractions[0].frac == 100.0

    def test_lever_rule_midpoint(self):
        """てこの法則: 中点で 50/50"""
        from ironcarbon.solver import lever

        r = lever("alpha_gamma", "Ferrite (α)", "Austenite (γ)", 0.022, 0.76, 0.391)
        assert r.fractions[0].frac == pytest.approx(50.0)
        assert r.fractions[1].frac == pytest.approx(50.0)
        assert r.fractions[0].pos == 0.022
        assert r.fractions[1].pos == 0.76

    def test_lever_rule_intercritical(self):
        """α+γ 域の分率は曲線値からのてこの法則"""
        from ironcarbon.boundaries import c_a3, c_alpha
        from ironcarbon.solver import get_state

        s = get_state(0.41, 750, 0)
        c1, c2 = c_alpha(750), c_a3(750)
        assert s.region_id == "alpha_gamma"
        assert s.fraction_of("Austenite") == pytest.approx((0.41 - c1) / (c2 - c1) * 100)
        assert s.fractions[0].pos == pytest.approx(c1)
        assert s.fractions[1].pos == pytest.approx(c2)

    def test_lever_degenerate_span(self):
        """幅 < EPS の tie line は単相扱い"""
        from ironcarbon.solver import lever

        r = lever("alpha_gamma", "Ferrite (α)", "Austenite (γ)", 0.5, 0.5 + 1e-6, 0.5)
        assert len(r.fractions) == 1
        assert r.fractions[0].name == "Ferrite (α)"
        assert r.fractions[0].frac == 100.0
        assert r.region_id == "alpha_gamma"

    def test_normalize_rescales(self):
        from ironcarbon.phases import PhaseFraction, RegionResult
        from ironcarbon.solver import normalize

        r = normalize(RegionResult("x", (PhaseFraction("a", 30.0, 0.0), PhaseFraction("b", 30.0, 1.0))))
        assert [f.frac for f in r.fractions] == pytest.approx([50.0, 50.0])

    @pytest.mark.parametrize("c, T, region", [
        (0.45, 1600, "L"),
        (0.02, 1510, "delta"),
        (0.20, 1510, "delta_L"),
        (0.50, 1510, "L"),
        (0.03, 1450, "delta"),
        (0.07, 1450, "delta_gamma"),
        (0.30, 1450, "gamma"),
        (0.80, 1450, "gamma_L"),
        (2.00, 1450, "L"),
        (2.00, 1300, "gamma_L"),
        (3.50, 1300, "L"),
        (6.00, 1200, "L_Fe3C"),
        (0.50, 1000, "alpha_gamma"),
        (0.00, 1000, "alpha"),
        (2.00, 900, "gamma_Fe3C"),
        (0.30, 800, "alpha_gamma"),
        (0.005, 800, "alpha"),
        (0.60, 800, "gamma"),
        (0.40, 600, "alpha_Fe3C"),
        (0.01, 600, "alpha"),
    ])
    def test_region_classification(self, c, T, region):
        from ironcarbon.solver import get_state

        assert get_state(c, T, 0).region_id == region

    def test_band_seams(self):
        """境界温度での帯の割り当て"""
        from ironcarbon.solver import find_band

        assert find_band(1538).name == "liquid"
        assert find_band(1495).name == "delta_liquid"
        assert find_band(1394).name == "peritectic"
        assert find_band(1147).name == "intercritical"
        assert find_band(912).name == "intercritical"
        assert find_band(727).name == "eutectoid"
        assert find_band(0).name == "eutectoid"

    def test_intercritical_tree_above_912(self):
        """912°C 以上でも α / α+γ の分岐はそのまま（c_α = 0, c_A3 = 0.76）"""
        from ironcarbon.solver import get_state

        assert get_state(0.0, 1000, 0).region_id == "alpha"
        s = get_state(0.4, 1000, 0)
        assert s.region_id == "alpha_gamma"
        assert s.fraction_of("Austenite") == pytest.approx(0.4 / 0.76 * 100)
        assert s.fractions[0].pos == 0.0
        assert s.fractions[1].pos == 0.76
        assert get_state(1.0, 1000, 0).region_id == "gamma"

    def test_peritectic_gamma_line_meets_solidus(self):
        """δ+γ 域の γ 側直線は 1495°C で 0.17"""
        from ironcarbon.boundaries import c_solidus
        from ironcarbon.solver import get_state

        s = get_state(0.10, 1494.0, 0)
        assert s.region_id == "delta_gamma"
        assert s.fractions[1].pos == pytest.approx(0.17 * 100 / 101)
        assert c_solidus(1495) == pytest.approx(0.17)

    def test_l_fe3c_fraction(self):
        from ironcarbon.boundaries import c_l_fe3c
        from ironcarbon.solver import get_state

        s = get_state(6.0, 1200, 0)
        c1 = c_l_fe3c(1200)
        assert s.fraction_of("Cementite") == pytest.approx((6.0 - c1) / (6.67 - c1) * 100)

    def test_quench_gating(self):
        """急冷判定"""
        from ironcarbon.solver import get_state

        assert not get_state(0.4, 100, 10).is_quenched
        assert get_state(0.4, 100, 150).is_quenched
        assert not get_state(2.5, 100, 150).is_quenched

    def test_quench_override(self):
        from ironcarbon.solver import get_state

        s = get_state(0.4, 100, 150)
        assert s.region_id == "martensite"
        assert s.region_label == "Martensitic (Quenched)"
        assert s.phases == ("Martensite (BCT)", "Retained Austenite")
        assert all(f.pos == 0.4 for f in s.fractions)

    def test_martensite_at_ms(self):
        """T = Ms ではまだ変態しない"""
        from ironcarbon.martensite import ms_temperature
        from ironcarbon.solver import get_state

        ms = ms_temperature(0.4)
        assert not get_state(0.4, ms, 150).is_quenched
        s = get_state(0.4, ms - 0.1, 150)
        assert s.is_quenched
        assert s.fraction_of("Martensite") < 1.0

    def test_martensite_far_below_ms(self):
        from ironcarbon.solver import get_state

        s = get_state(0.4, 0, 150)
        assert s.fraction_of("Martensite") == pytest.approx(98.29, abs=0.05)
        assert s.fraction_of("Retained") == pytest.approx(1.71, abs=0.05)

    def test_ms_temp_reporting(self):
        from ironcarbon.solver import get_state

        assert get_state(0.4, 800, 0).ms_temp == pytest.approx(369.8)
        assert get_state(2.5, 800, 0).ms_temp is None
        assert get_state(2.0, 800, 0).ms_temp is None

    def test_eutectoid_point(self):
        """C=0.76, 700°C → Pearlite"""
        from ironcarbon.solver import get_state

        s = get_state(0.76, 700, 0)
        assert s.region_id == "alpha_Fe3C"
        assert "Pearlite" in s.region_label
        assert s.region_label == "Eutectoid (Pearlite)"
        assert s.micro == "100% Pearlite (Lamellar)"

    def test_liquid_end_to_end(self):
        """C=0.45, 1600°C → 均一液相"""
        from ironcarbon.solver import get_state

        s = get_state(0.45, 1600, 0)
        assert s.region_id == "L"
        assert s.region_label == "Liquid Melt"
        assert len(s.fractions) == 1
        assert s.fractions[0].name == "Liquid"
        assert s.fractions[0].frac == 100.0
        assert s.micro == "Uniform Liquid"
        assert (s.yield_strength, s.uts, s.hardness) == (0, 0, 0)
        assert s.elong == 100

    @pytest.mark.parametrize("region_id, c, label", [
        ("gamma_Fe3C", 2.0, "Austenite + Cementite"),
        ("gamma_Fe3C", 3.0, "Austenite + Ledeburite"),
        ("alpha_Fe3C", 0.4, "Hypoeutectoid (α + P)"),
        ("alpha_Fe3C", 0.77, "Eutectoid (Pearlite)"),
        ("alpha_Fe3C", 1.2, "Hypereutectoid (P + Fe₃C)"),
        ("alpha_Fe3C", 3.0, "Cast Iron (White)"),
        ("alpha_gamma", 0.3, "Intercritical (α + γ)"),
        ("delta_gamma", 0.1, "Two-Phase (δ + γ)"),
        ("nonsense", 0.1, "Unknown Region"),
    ])
    def test_region_label(self, region_id, c, label):
        from ironcarbon.solver import region_label

        assert region_label(region_id, c) == label

    def test_classify_region_ignores_quench(self):
        from ironcarbon.solver import classify_region

        r = classify_region(0.4, 100)
        assert r.region_id == "alpha_Fe3C"
        assert r.is_two_phase

    def test_as_dict_contract(self):
        """外部レコードのキー"""
        from ironcarbon.solver import get_state

        d = get_state(0.45, 800, 0).as_dict()
        assert set(d) == {
            "regionId", "regionLabel", "fractions", "isQuenched", "msTemp",
            "micro", "crystal", "yield", "uts", "hardness", "elong",
        }
        assert set(d["fractions"][0]) == {"name", "frac", "pos"}
        assert isinstance(d["yield"], int)

    def test_state_frozen(self):
        """ThermodynamicState は frozen dataclass"""
        from ironcarbon.solver import get_state

        s = get_state(0.45, 800, 0)
        with pytest.raises((AttributeError, TypeError)):
            s.region_id = "gamma"  # type: ignore

    def test_summary(self):
        from ironcarbon.solver import get_state

        text = get_state(0.4, 100, 150).summary()
        assert "Quenched" in text
        assert "Martensite (BCT)" in text


# =============================================================================
# Property Tests (properties.py)
# =============================================================================

class TestProperties:
    """properties.py のテスト"""

    def test_rule_of_mixtures(self):
        from ironcarbon.phases import PhaseFraction
        from ironcarbon.properties import predict_properties

        fr = [PhaseFraction("Ferrite (α)", 50.0, 0.02), PhaseFraction("Cementite (Fe₃C)", 50.0, 6.67)]
        p = predict_properties(0.4, 500, fr, False)
        assert p.yield_strength == 675
        assert p.hardness == 440
        assert p.uts == 1131
        assert p.elong == 21
        assert p.crystal == "BCC + Orthorhombic"
        assert p.micro == "Proeutectoid Ferrite + Pearlite"

    def test_quenched_lath(self):
        from ironcarbon.properties import predict_properties

        p = predict_properties(0.4, 100, [], True)
        assert p.micro == "Lath Martensite"
        assert p.crystal == "Body-Centered Tetragonal (BCT)"
        assert (p.yield_strength, p.hardness, p.uts, p.elong) == (1800, 500, 2180, 9)

    def test_quenched_plate(self):
        from ironcarbon.properties import predict_properties

        p = predict_properties(0.8, 100, [], True)
        assert p.micro == "Plate Martensite"
        assert (p.yield_strength, p.hardness, p.uts, p.elong) == (2600, 700, 3140, 3)

    def test_quenched_elongation_floor(self):
        from ironcarbon.properties import predict_properties

        assert predict_properties(1.9, 100, [], True).elong == 1

    def test_hot_nominal(self):
        from ironcarbon.properties import predict_properties
        from ironcarbon.solver import get_state

        p = predict_properties(0.45, 800, get_state(0.45, 800).fractions, False)
        assert (p.yield_strength, p.uts, p.hardness, p.elong) == (50, 120, 40, 45)
        assert p.crystal == "FCC Dominant"

    def test_liquid_above_peritectic(self):
        from ironcarbon.properties import predict_properties

        p = predict_properties(0.0, 1500, [], False)
        assert p.micro == "Uniform Liquid"
        assert p.crystal == "Amorphous"
        assert p.elong == 100

    def test_pearlite_properties(self):
        """共析鋼の室温特性"""
        from ironcarbon.solver import get_state

        s = get_state(0.76, 700, 0)
        assert s.yield_strength == pytest.approx(267, abs=1)
        assert s.hardness == pytest.approx(160, abs=1)
        assert s.uts == pytest.approx(440, abs=1)
        assert s.elong == 36

    @pytest.mark.parametrize("c, micro", [
        (0.01, "Equiaxed Ferrite"),
        (0.40, "Proeutectoid Ferrite + Pearlite"),
        (0.77, "100% Pearlite (Lamellar)"),
        (1.20, "Proeutectoid Cementite Network + Pearlite"),
        (4.30, "Ledeburite (Eutectic)"),
        (3.00, "Primary Cementite + Transformed Ledeburite"),
        (5.50, "Primary Cementite + Transformed Ledeburite"),
    ])
    def test_microstructure_name(self, c, micro):
        from ironcarbon.properties import microstructure_name

        assert microstructure_name(c) == micro

    def test_round_half_up(self):
        from ironcarbon.properties import _round_half_up

        assert _round_half_up(2.5) == 3
        assert _round_half_up(2.4999) == 2

    @pytest.mark.parametrize("c, rating", [
        (0.20, "Excellent"),
        (0.25, "Excellent"),
        (0.45, "Fair"),
        (1.00, "Poor"),
        (3.00, "Unweldable"),
    ])
    def test_weldability(self, c, rating):
        from ironcarbon.properties import weldability

        assert weldability(c).rating == rating


# =============================================================================
# Package-level import tests
# =============================================================================

class TestPackageInit:
    """__init__.py のテスト"""

    def test_top_level_import(self):
        from ironcarbon import (
            BOUNDARY_CURVES,
            ThermodynamicState,
            c_a3,
            get_state,
            predict_properties,
            simulate_cooling,
        )

        assert BOUNDARY_CURVES["a3"] is c_a3
        assert isinstance(get_state(0.2, 20), ThermodynamicState)

    def test_version(self):
        import ironcarbon

        assert ironcarbon.__version__ == "1.2.0"

    def test_info_runs(self):
        from ironcarbon import info

        info()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
