"""
Habit Names - wbudowany katalog nawyków i ich domyślne cele
"""
from dataclasses import dataclass, replace
from typing import Optional

from .frequency import Frequency
from .habit_enums import CodecEnum, Compare, UnitSystem


class HabitName(CodecEnum):
    """Kanoniczna tożsamość nawyku (CUSTOM = nazwa własna użytkownika)"""
    EXERCISE = "exercise"
    MEDITATION = "meditation"
    READING = "reading"
    WRITING = "writing"
    PROGRAMMING = "programming"
    LEARNING = "learning"
    DRAWING = "drawing"
    MUSIC = "music"
    JOURNALING = "journaling"
    WALKING = "walking"
    RUNNING = "running"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    YOGA = "yoga"
    COOKING = "cooking"
    CLEANING = "cleaning"
    GARDENING = "gardening"
    SOCIALIZING = "socializing"
    MARTIAL_ARTS = "martial_arts"
    LEARNING_LANGUAGE = "learning_language"
    INVESTING = "investing"
    SAVING_MONEY = "saving_money"
    ONLINE_COURSE = "online_course"
    SLEEP_TRACKING = "sleep_tracking"
    NO_SMOKING = "no_smoking"
    NO_DRINKING = "no_drinking"
    NO_SUGAR = "no_sugar"
    NO_FAST_FOOD = "no_fast_food"
    CUSTOM = "custom"

    @classmethod
    def _default_member(cls):
        return cls.CUSTOM

    @classmethod
    def lookup(cls, name: str) -> 'HabitName':
        """Nazwa z kolumny habit.name -> HabitName (CUSTOM dla nazw własnych)"""
        try:
            return cls(name)
        except ValueError:
            return cls.CUSTOM

    def info(self) -> 'HabitInfo':
        """Wpis katalogu (kopia, z własnym Frequency)"""
        info = _CATALOGUE[self]
        return replace(info, frequency=replace(info.frequency))


@dataclass(frozen=True)
class HabitInfo:
    """Opis nawyku z katalogu"""
    name: str
    description: str
    is_suitable_for_minors: bool
    icon: Optional[str]
    frequency: Frequency
    compare: Compare


def _info(name: str, description: str, unit: Optional[UnitSystem], target: int,
          compare: Compare = Compare.GREATER_OR_EQUAL, minors: bool = True) -> HabitInfo:
    return HabitInfo(
        name=name,
        description=description,
        is_suitable_for_minors=minors,
        icon=None,
        frequency=Frequency.new(unit=unit, target_value=target, comparator=compare),
        compare=compare,
    )


_MINUTES = UnitSystem.MINUTES
_EQ = Compare.EQUAL
_LE = Compare.LESS_OR_EQUAL

_CATALOGUE = {
    HabitName.EXERCISE: _info("Exercise", "Perform any physical activity that gets your heart rate up.", _MINUTES, 30),
    HabitName.MEDITATION: _info("Meditation", "Practice mindfulness and meditation.", _MINUTES, 10),
    HabitName.READING: _info("Reading", "Read any book or blog.", _MINUTES, 30),
    HabitName.WRITING: _info("Writing", "Write a blog post, journal entry, or any other text.", _MINUTES, 30),
    HabitName.PROGRAMMING: _info("Programming", "Write code for a project or learn a new programming language.", _MINUTES, 30),
    HabitName.LEARNING: _info("Learning", "Learn a new skill or study for a test.", _MINUTES, 30),
    HabitName.DRAWING: _info("Drawing", "Draw a picture or sketch.", _MINUTES, 30),
    HabitName.MUSIC: _info("Music", "Play an instrument or sing.", _MINUTES, 30),
    HabitName.JOURNALING: _info("Journaling", "Write a journal entry or diary.", None, 1, _EQ),
    HabitName.WALKING: _info("Walking", "Go for a walk.", UnitSystem.STEPS, 10000),
    HabitName.RUNNING: _info("Running", "Go for a run or jog.", UnitSystem.STEPS, 10000),
    HabitName.CYCLING: _info("Cycling", "Go for a bike ride.", UnitSystem.KILOMETERS, 5),
    HabitName.SWIMMING: _info("Swimming", "Go for a swim.", _MINUTES, 20),
    HabitName.YOGA: _info("Yoga", "Practice yoga or stretching.", _MINUTES, 20),
    HabitName.COOKING: _info("Cooking", "Cook a meal or bake something.", None, 1, _EQ),
    HabitName.CLEANING: _info("Cleaning", "Clean your home or workspace.", None, 1, _EQ),
    HabitName.GARDENING: _info("Gardening", "Plant or tend to a garden.", None, 1, _EQ),
    HabitName.SOCIALIZING: _info("Socializing", "Spend time with friends or family.", None, 1, _EQ),
    HabitName.MARTIAL_ARTS: _info("Martial Arts", "Practice martial arts or self-defense.", None, 1, _EQ),
    HabitName.LEARNING_LANGUAGE: _info("Learning a Language", "Learn a new language or practice one you already know.", None, 1, _EQ),
    HabitName.INVESTING: _info("Investing", "Invest in stocks, bonds, or cryptocurrency.", None, 1, _EQ, minors=False),
    HabitName.SAVING_MONEY: _info("Saving Money", "Save money for a goal or retirement.", None, 1, _EQ, minors=False),
    HabitName.ONLINE_COURSE: _info("Online Course", "Take an online course or class.", None, 1, _EQ),
    HabitName.SLEEP_TRACKING: _info("Sleep Tracking", "Track your sleep or take a nap.", UnitSystem.HOURS, 8, _LE),
    HabitName.NO_SMOKING: _info("No Smoking", "Don't smoke or use tobacco products.", None, 0, _LE, minors=False),
    HabitName.NO_DRINKING: _info("No Drinking", "Don't drink alcohol or use drugs.", None, 0, _LE, minors=False),
    HabitName.NO_SUGAR: _info("No Sugar", "Don't eat any sugar or sweets.", None, 0, _LE),
    HabitName.NO_FAST_FOOD: _info("No Fast Food", "Don't eat any fast food or junk food.", None, 0, _EQ),
    HabitName.CUSTOM: _info("Custom", "Create a custom habit.", None, 1, _EQ),
}
