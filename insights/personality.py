"""Pick one "personality" label for a year of classes.

The rules are an ordered table: the first predicate that holds wins, and
`DEFAULT_RULE` always holds, so `classify` returns exactly one label for any
input, including an empty year.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from parsers.models import AttendanceRecord

from .aggregate import EVENING, MORNING, Aggregates


WEEKEND = (5, 6)  # date.weekday(): Saturday, Sunday


@dataclass(frozen=True)
class Signals:
    total: int
    longest_streak: int
    max_month: int
    morning_share: float
    evening_share: float
    top_instructor: str
    top_instructor_share: float
    distinct_instructors: int
    active_months: int
    class_types: int
    weekend_share: float


@dataclass(frozen=True)
class PersonalityLabel:
    title: str
    description: str
    emoji: str
    rule: str


@dataclass(frozen=True)
class Rule:
    name: str
    predicate: Callable[[Signals], bool]
    title: str
    description: str
    emoji: str

    def label(self, s: Signals) -> PersonalityLabel:
        return PersonalityLabel(
            title=self.title,
            description=self.description.format(s=s),
            emoji=self.emoji,
            rule=self.name,
        )


RULES: tuple[Rule, ...] = (
    Rule("centurion", lambda s: s.total >= 100,
         "The Centurion", "100+ classes! You're basically a [solidcore] board member.", "👑"),
    Rule("streak_monster", lambda s: s.longest_streak >= 7,
         "Streak Monster", "{s.longest_streak} days straight! Your muscles don't know rest days exist.", "🔥"),
    Rule("marathon_month", lambda s: s.max_month >= 20,
         "Marathon Month", "{s.max_month} classes in one month? Beast mode activated.", "🏃"),
    Rule("dawn_patrol", lambda s: s.morning_share >= 0.7,
         "Dawn Patrol", "Up before the sun to shake. Coffee who?", "🌅"),
    Rule("night_owl", lambda s: s.evening_share >= 0.6,
         "Night Owl", "Evening shakes hit different. Post-work therapy.", "🦉"),
    Rule("loyalist", lambda s: bool(s.top_instructor) and s.top_instructor_share >= 0.5,
         "The Loyalist", "You and {s.top_instructor} are basically besties.", "🤝"),
    Rule("variety_seeker", lambda s: s.distinct_instructors >= 8,
         "Variety Seeker", "Why pick a favorite when they're all amazing?", "🎰"),
    Rule("year_round", lambda s: s.active_months >= 10,
         "Year-Round Warrior", "Seasonal? Not you. You showed up all year.", "⚔️"),
    Rule("format_explorer", lambda s: s.class_types >= 3,
         "Format Explorer", "Signature, Focus, Foundation... you've tried them all!", "🧭"),
    Rule("weekend_warrior", lambda s: s.weekend_share >= 0.6,
         "Weekend Warrior", "Saturdays are for shaking, not sleeping in.", "📅"),
    Rule("rising_star", lambda s: 20 <= s.total < 50,
         "Rising Star", "Just getting started but already addicted!", "⭐"),
    Rule("dedicated", lambda s: s.total >= 50,
         "Dedicated", "50+ classes shows serious commitment!", "💎"),
)

DEFAULT_RULE = Rule("default", lambda s: True,
                    "Shake Enthusiast", "You showed up, you shook, you conquered.", "💪")


def signals(aggregates: Aggregates, records: Sequence[AttendanceRecord]) -> Signals:
    total = aggregates.total_classes
    rows = [r for r in records if r.date.year == aggregates.year]
    weekend = sum(1 for r in rows if r.date.weekday() in WEEKEND)
    top_name, top_count = aggregates.top_instructors[0] if aggregates.top_instructors else ("", 0)

    return Signals(
        total=total,
        longest_streak=aggregates.longest_streak,
        max_month=max(aggregates.monthly_activity, default=0),
        morning_share=aggregates.share(MORNING),
        evening_share=aggregates.share(EVENING),
        top_instructor=top_name,
        top_instructor_share=top_count / total if total else 0.0,
        distinct_instructors=aggregates.distinct_instructors,
        active_months=sum(1 for n in aggregates.monthly_activity if n > 0),
        class_types=len(aggregates.class_type_counts),
        weekend_share=weekend / total if total else 0.0,
    )


def pick_rule(s: Signals) -> Rule:
    for rule in RULES:
        if rule.predicate(s):
            return rule
    return DEFAULT_RULE


def classify(aggregates: Aggregates, records: Sequence[AttendanceRecord]) -> PersonalityLabel:
    s = signals(aggregates, records)
    return pick_rule(s).label(s)
