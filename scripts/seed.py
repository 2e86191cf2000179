#!/usr/bin/env python3
"""
Seed script: inserts fake evaluations and prints each generated PIN once.
Run: python scripts/seed.py [count]
"""

import asyncio
import os
import random
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from faker import Faker

from evaluaciones.config import settings
from evaluaciones.database import create_schema, make_engine, make_session_maker
from evaluaciones.schemas.evaluation import EvaluationForm
from evaluaciones.storage.repositories import create_evaluation

COURSES = ["Matemáticas", "Física", "Programación", "Historia", "Química"]


async def seed(count: int):
    fake = Faker("es_ES")
    engine = make_engine(settings)
    if settings.auto_create_schema:
        await create_schema(engine)
    session_maker = make_session_maker(engine)

    async with session_maker() as session:
        for _ in range(count):
            pin = fake.numerify("######")
            form = EvaluationForm.from_form(
                {
                    "student_name": fake.name(),
                    "student_id": fake.bothify("A########"),
                    "course": random.choice(COURSES),
                    "date": fake.date_this_year().isoformat(),
                    "score": f"{random.uniform(50, 100):.1f}",
                    "comments": fake.paragraph(nb_sentences=2),
                    "view_code": pin,
                }
            )
            ev = await create_evaluation(session, form, settings.pin_pepper)
            print(f"#{ev.id:<4} {ev.student_name:<35} PIN: {pin}")

    await engine.dispose()
    print("Seed complete!")


if __name__ == "__main__":
    asyncio.run(seed(int(sys.argv[1]) if len(sys.argv) > 1 else 10))
