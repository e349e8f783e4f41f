#!/usr/bin/env python3
"""Seed a week of health logs for the test user so insights have something to work with."""

import asyncio
import uuid
from datetime import date, timedelta

from sqlalchemy import delete

from pharmis_backend.config import settings
from pharmis_backend.domain.health.entities import (
    ActivityType,
    DailyLog,
    LifestyleLog,
    MedicationLog,
    Symptom,
)
from pharmis_backend.infrastructure.db import bootstrap

TEST_USER_ID = uuid.UUID('11111111-1111-1111-1111-111111111111')

# (days ago, mood, notes, symptoms, extra medications)
DAILY_LOGS = [
    (6, 3, "Feeling normal today.", [], []),
    (5, 4, "Good day, more energy than usual.", [], []),
    (4, 2, "Low energy, slight headache.", [
        ("Headache", 2, "Started in the morning, lasted all day."),
        ("Fatigue", 2, "Felt tired throughout the day."),
    ], [("Ventolin HFA", "One puff")]),
    (3, 3, "Back to normal.", [], []),
    (2, 5, "Excellent day, very productive.", [
        ("Sore throat", 1, "Mild irritation in the morning."),
    ], []),
    (1, 4, "Good sleep, feeling well.", [], []),
    (0, 3, "Average day, nothing special to note.", [], []),
]

# (days ago, type, name, duration, intensity, quantity, notes)
LIFESTYLE_LOGS = [
    (5, ActivityType.EXERCISE, "Walking", 30, "Moderate", None, "Morning walk in the park"),
    (3, ActivityType.EXERCISE, "Running", 45, "High", None, "Evening jog"),
    (2, ActivityType.EXERCISE, "Yoga", 60, "Low", None, "Morning yoga session"),
    (4, ActivityType.DRINKING, "Wine", None, None, 2, "Two glasses with dinner"),
    (1, ActivityType.SMOKING, "Cigarettes", None, None, 5, "Stressful day at work"),
]


async def create_test_data():
    await bootstrap.init_engine(settings())
    today = date.today()

    try:
        async with bootstrap.session_scope() as session:
            # Start from a clean week for the test user
            await session.execute(delete(DailyLog).where(DailyLog.user_id == TEST_USER_ID))
            await session.execute(delete(LifestyleLog).where(LifestyleLog.user_id == TEST_USER_ID))

            for days_ago, mood, notes, symptoms, medications in DAILY_LOGS:
                log = DailyLog(
                    user_id=TEST_USER_ID,
                    date=today - timedelta(days=days_ago),
                    mood=mood,
                    notes=notes,
                )
                log.symptoms = [Symptom(name=n, severity=s, notes=sn) for n, s, sn in symptoms]
                log.medications = [MedicationLog(name="Lisinopril", dosage="10mg", taken=True)] + [
                    MedicationLog(name=n, dosage=d, taken=True) for n, d in medications
                ]
                session.add(log)

            for days_ago, activity_type, name, duration, intensity, quantity, notes in LIFESTYLE_LOGS:
                session.add(LifestyleLog(
                    user_id=TEST_USER_ID,
                    date=today - timedelta(days=days_ago),
                    activity_type=activity_type.value,
                    activity_name=name,
                    duration=duration,
                    intensity=intensity,
                    quantity=quantity,
                    notes=notes,
                ))

            await session.commit()

        print(f"Seeded {len(DAILY_LOGS)} daily logs and {len(LIFESTYLE_LOGS)} lifestyle logs")
        print(f"User ID: {TEST_USER_ID}")
        print(f"Window: {today - timedelta(days=6)} .. {today}")
    finally:
        await bootstrap.dispose_engine()


if __name__ == "__main__":
    asyncio.run(create_test_data())
