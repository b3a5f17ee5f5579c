from types import SimpleNamespace

import pytest

from roster.scoring import (
    Classification,
    attendance_grid,
    attendance_rate,
    classify,
    overall_average,
    score_or_zero,
    scorecard,
    term_average,
    year_catechism_average,
)
from roster.utils import current_total_weeks


def _student(**fields):
    defaults = dict(
        score_45_hk1=None, score_exam_hk1=None, score_45_hk2=None, score_exam_hk2=None,
        attendance_thu5=0, attendance_cn=0,
    )
    defaults.update(fields)
    return SimpleNamespace(**defaults)


def test_term_average_weights_exam_twice():
    assert term_average(7.0, 8.0) == 7.67
    assert term_average(10, 10) == 10
    assert term_average(0, 0) == 0


def test_term_average_is_none_until_scored():
    assert term_average(None, 8.0) is None
    assert term_average(7.0, None) is None


def test_term_average_is_monotonic():
    grid = [x / 2 for x in range(21)]
    for s45 in grid:
        for exam_low, exam_high in zip(grid, grid[1:]):
            assert term_average(s45, exam_low) <= term_average(s45, exam_high)
            assert term_average(exam_low, s45) <= term_average(exam_high, s45)


def test_year_average_weights_second_term_twice():
    assert year_catechism_average(6.0, 9.0) == pytest.approx(8.0)
    assert year_catechism_average(7.67, 7.67) == pytest.approx(7.67)


def test_year_average_counts_unscored_terms_as_zero():
    assert year_catechism_average(None, None) == 0
    assert year_catechism_average(9.0, None) == pytest.approx(3.0)


def test_attendance_rate_example():
    assert attendance_rate(20, 15, 40) == pytest.approx(4.25)


def test_attendance_rate_defaults_to_forty_weeks():
    assert attendance_rate(20, 15, None) == pytest.approx(4.25)


def test_attendance_rate_follows_the_configured_default(settings):
    settings.DEFAULT_TOTAL_WEEKS = 37
    assert attendance_rate(20, 15, None) == pytest.approx(17 * 10 / 37)


@pytest.mark.django_db
def test_attendance_rate_default_matches_the_roster_fallback(settings):
    settings.DEFAULT_TOTAL_WEEKS = 37
    assert current_total_weeks() == 37
    assert attendance_rate(20, 15, None) == attendance_rate(20, 15, current_total_weeks())


def test_attendance_rate_is_zero_for_an_empty_year():
    assert attendance_rate(20, 15, 0) == 0.0


def test_overall_average_just_below_good_is_average():
    overall = overall_average(7.67, 4.25)
    assert overall == pytest.approx(6.302)
    assert classify(overall) == Classification.AVERAGE


@pytest.mark.parametrize('value, expected', [
    (10.0, Classification.EXCELLENT),
    (8.0, Classification.EXCELLENT),
    (7.99, Classification.GOOD),
    (6.5, Classification.GOOD),
    (6.49, Classification.AVERAGE),
    (5.0, Classification.AVERAGE),
    (4.99, Classification.BELOW_AVERAGE),
    (0.0, Classification.BELOW_AVERAGE),
])
def test_classify_thresholds(value, expected):
    assert classify(value) == expected


def test_classify_buckets_are_contiguous():
    order = list(Classification)[::-1]
    previous = order.index(classify(0.0))
    for step in range(1, 1001):
        current = order.index(classify(step / 100))
        assert current in (previous, previous + 1)
        previous = current
    assert classify(10.0) == Classification.EXCELLENT


def test_score_or_zero():
    assert score_or_zero(None) == 0.0
    assert score_or_zero(7) == 7.0


def test_scorecard_for_a_scored_student():
    card = scorecard(_student(
        score_45_hk1=7.0, score_exam_hk1=8.0, score_45_hk2=7.0, score_exam_hk2=8.0,
        attendance_thu5=20, attendance_cn=15,
    ), total_weeks=40)

    assert card.term1_average == 7.67
    assert card.term2_average == 7.67
    assert card.catechism_average == pytest.approx(7.67)
    assert card.attendance_rate == pytest.approx(4.25)
    assert card.overall_average == pytest.approx(6.302)
    assert card.classification == Classification.AVERAGE

    data = card.as_dict()
    assert data['classification'] == 'average'
    assert data['classification_label'] == 'Trung bình'
    assert data['overall_average'] == 6.3


def test_scorecard_keeps_unscored_terms_as_none():
    card = scorecard(_student(score_45_hk1=6.0), total_weeks=40)
    assert card.term1_average is None
    assert card.term2_average is None
    assert card.catechism_average == pytest.approx(2.0 / 3)
    assert card.classification == Classification.BELOW_AVERAGE


def test_attendance_grid_rows_of_ten():
    rows = attendance_grid(12, 25)
    assert [len(row) for row in rows] == [10, 10, 5]
    assert rows[1][1] == {'week': 12, 'attended': True}
    assert rows[1][2] == {'week': 13, 'attended': False}
    assert rows[2][-1]['week'] == 25


def test_attendance_grid_empty_year():
    assert attendance_grid(3, 0) == []
    assert attendance_grid(3, None) == []
