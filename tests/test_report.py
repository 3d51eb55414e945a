import pytest

from insights import build_report
from parsers import EmptyResultError, NoRecordsForYearError, extract_records
from smoke_pipeline import SAMPLE_EXPORT


@pytest.fixture
def records():
    return extract_records(SAMPLE_EXPORT)


def test_defaults_to_latest_year(records):
    report = build_report(records)
    assert set(report) == {"years", "year", "records", "stats", "personality"}
    assert report["years"] == [2025, 2024]
    assert report["year"] == 2025
    assert [r["date"] for r in report["records"]] == ["12/13/2025", "12/12/2025", "12/10/2025", "12/07/2025"]
    assert report["stats"]["total_minutes"] == 180
    assert report["stats"]["top_location"] == "Arsenal Yards"
    assert report["personality"]["title"] == "Dawn Patrol"


def test_selected_year(records):
    report = build_report(records, year=2024)
    assert report["years"] == [2025, 2024]
    assert report["stats"]["total_minutes"] == 65
    assert report["records"][0]["type"] == "Advanced65"


def test_top_n(records):
    assert len(build_report(records, top_n=1)["stats"]["top_instructors"]) == 1


def test_year_without_records(records):
    with pytest.raises(NoRecordsForYearError) as exc:
        build_report(records, year=2023)
    assert exc.value.message == "No classes found for 2023. Try selecting a different year."


def test_no_records_at_all():
    with pytest.raises(EmptyResultError):
        build_report([])
