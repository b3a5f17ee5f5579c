"""
roster/scoring.py
─────────────────
Score & attendance aggregator.

Pure functions over a student's raw numbers.  Nothing here touches the
database; the number of weeks in the school year is passed in by the caller
(see roster.utils.current_total_weeks), with settings.DEFAULT_TOTAL_WEEKS as
the only fallback.

Missing scores have two meanings that are kept apart:
  * for display they stay None ("not yet scored"),
  * for averaging they count as 0 (score_or_zero).
"""

from dataclasses import asdict, dataclass
from typing import Optional

from django.conf import settings
from django.db import models

EXCELLENT_FROM = 8.0
GOOD_FROM = 6.5
AVERAGE_FROM = 5.0


class Classification(models.TextChoices):
    EXCELLENT     = 'excellent',     'Giỏi'
    GOOD          = 'good',          'Khá'
    AVERAGE       = 'average',       'Trung bình'
    BELOW_AVERAGE = 'below_average', 'Yếu'


def score_or_zero(value):
    return 0.0 if value is None else float(value)


def term_average(score_45, score_exam):
    """(45-minute test + exam × 2) / 3, two decimals.  None until both are scored."""
    if score_45 is None or score_exam is None:
        return None
    return round((score_45 + score_exam * 2) / 3, 2)


def year_catechism_average(avg_term1, avg_term2):
    """
    Year-end catechism average: (term 1 + term 2 × 2) / 3.
    Unscored terms count as 0.
    """
    return (score_or_zero(avg_term1) + score_or_zero(avg_term2) * 2) / 3


def attendance_rate(count_thu5, count_cn, total_weeks):
    """
    Attendance mark on a 0–10 scale.  Thursdays weigh 0.4, Sundays 0.6.
    total_weeks=None falls back to settings.DEFAULT_TOTAL_WEEKS; 0 weeks gives 0.
    """
    if total_weeks is None:
        total_weeks = settings.DEFAULT_TOTAL_WEEKS
    if total_weeks <= 0:
        return 0.0
    return (score_or_zero(count_thu5) * 0.4 + score_or_zero(count_cn) * 0.6) * (10 / total_weeks)


def overall_average(catechism_avg, rate):
    return score_or_zero(catechism_avg) * 0.6 + score_or_zero(rate) * 0.4


def classify(value):
    """Bucket a 0–10 average; each threshold belongs to the upper bucket."""
    if value >= EXCELLENT_FROM:
        return Classification.EXCELLENT
    if value >= GOOD_FROM:
        return Classification.GOOD
    if value >= AVERAGE_FROM:
        return Classification.AVERAGE
    return Classification.BELOW_AVERAGE


# ── Per-student summary ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class StudentScorecard:
    term1_average: Optional[float]
    term2_average: Optional[float]
    catechism_average: float
    attendance_rate: float
    overall_average: float
    classification: Classification

    def as_dict(self):
        data = asdict(self)
        data['classification'] = self.classification.value
        data['classification_label'] = self.classification.label
        for key in ('catechism_average', 'attendance_rate', 'overall_average'):
            data[key] = round(data[key], 2)
        return data


def scorecard(student, total_weeks):
    """Everything the roster shows for one student, computed from raw fields."""
    computed_term1 = term_average(score_or_zero(student.score_45_hk1), score_or_zero(student.score_exam_hk1))
    computed_term2 = term_average(score_or_zero(student.score_45_hk2), score_or_zero(student.score_exam_hk2))

    catechism = year_catechism_average(computed_term1, computed_term2)
    rate = attendance_rate(student.attendance_thu5, student.attendance_cn, total_weeks)
    overall = overall_average(catechism, rate)

    return StudentScorecard(
        term1_average=term_average(student.score_45_hk1, student.score_exam_hk1),
        term2_average=term_average(student.score_45_hk2, student.score_exam_hk2),
        catechism_average=catechism,
        attendance_rate=rate,
        overall_average=overall,
        classification=classify(overall),
    )


def attendance_grid(attended, total_weeks, row_size=10):
    """
    Week-by-week grid for the attendance page: weeks 1..total_weeks, the first
    *attended* of them ticked, split into rows of *row_size*.
    """
    weeks = [
        {'week': week, 'attended': week <= attended}
        for week in range(1, (total_weeks or 0) + 1)
    ]
    return [weeks[i:i + row_size] for i in range(0, len(weeks), row_size)]
