from pathfinder.logic.contracts import Severity
from pathfinder.logic.risk_assessor import (
    assess_academic_risk,
    assess_financial_risk,
    assess_risks,
    assess_time_risk,
    assess_visa_risk,
)


class TestFinancialRisk:
    def test_budget_mismatch(self, make_profile, make_university, make_country):
        university = make_university(tuition={"currency": "EUR", "annual_cost": 18750, "tier": "medium"})
        risk = assess_financial_risk(make_profile(budget_level="low"), university, make_country())
        assert risk.severity == Severity.HIGH
        assert risk.likelihood == 70
        assert risk.description == "Tuition (EUR 18,750) may exceed your low budget"

    def test_medium_budget_high_tuition_is_mismatch(self, make_profile, make_university, make_country):
        university = make_university(tuition={"currency": "USD", "annual_cost": 53790, "tier": "high"})
        risk = assess_financial_risk(make_profile(budget_level="medium"), university, make_country())
        assert risk.severity == Severity.HIGH
        assert risk.likelihood == 70

    def test_high_cost_of_living_raises_severity_only(self, make_profile, make_university, make_country):
        country = make_country("Ireland", "IE", cost_tier="high")
        risk = assess_financial_risk(make_profile(), make_university(country="Ireland"), country)
        assert risk.severity == Severity.HIGH
        assert risk.likelihood == 30
        assert "living costs in Ireland are high" in risk.description

    def test_manageable(self, profile, make_university, make_country):
        risk = assess_financial_risk(profile, make_university(), make_country())
        assert risk.severity == Severity.LOW
        assert risk.likelihood == 30
        assert risk.description == "Costs are manageable with medium budget"

    def test_missing_country_record_is_not_high_cost(self, profile, make_university):
        risk = assess_financial_risk(profile, make_university(country="Japan"), None)
        assert risk.severity == Severity.LOW
        assert risk.likelihood == 30


class TestVisaRisk:
    def test_table(self, profile, make_university):
        easy = assess_visa_risk(profile, make_university(visa_difficulty="easy"))
        medium = assess_visa_risk(profile, make_university(visa_difficulty="medium"))
        hard = assess_visa_risk(profile, make_university(visa_difficulty="hard"))
        assert (easy.severity, easy.likelihood) == (Severity.LOW, 10)
        assert (medium.severity, medium.likelihood) == (Severity.MEDIUM, 30)
        assert (hard.severity, hard.likelihood) == (Severity.HIGH, 60)


class TestAcademicRisk:
    def test_low_confidence_capacity_is_three(self, make_profile, make_university):
        profile = make_profile(confidence_level="low")
        assert assess_academic_risk(profile, make_university(workload_intensity=3)).severity == Severity.LOW
        overloaded = assess_academic_risk(profile, make_university(workload_intensity=4))
        assert overloaded.severity == Severity.HIGH
        assert overloaded.likelihood == 60
        assert "4/10" in overloaded.description

    def test_medium_confidence(self, profile, make_university):
        manageable = assess_academic_risk(profile, make_university(workload_intensity=7))
        assert (manageable.severity, manageable.likelihood) == (Severity.LOW, 20)
        assert assess_academic_risk(profile, make_university(workload_intensity=8)).severity == Severity.HIGH

    def test_high_confidence_never_overloaded(self, make_profile, make_university):
        profile = make_profile(confidence_level="high")
        assert assess_academic_risk(profile, make_university(workload_intensity=10)).severity == Severity.LOW


def test_time_risk_is_constant(make_profile, make_university):
    a = assess_time_risk(make_profile(), make_university())
    b = assess_time_risk(make_profile(budget_level="high", main_fear="time"), make_university(workload_intensity=1))
    assert a == b
    assert (a.severity, a.likelihood) == (Severity.MEDIUM, 40)


def test_assess_risks_covers_all_categories(profile, make_university, make_country):
    risks = assess_risks(profile, make_university(), make_country())
    assert [name for name, _ in risks.categories()] == ["financial", "visa", "academic", "time"]
    for _, entry in risks.categories():
        assert entry.mitigation
        assert 0 <= entry.likelihood <= 100
