"""Birth-date numerology profile: day born, life line, karmic numbers.

Unlike the daily scorer, these readings keep the master numbers 11, 22
and 33 when reducing.
"""

from __future__ import annotations

from datetime import date, datetime

from app.energy.dates import coerce_date
from app.energy.models import (
    DayBornAnalysis,
    KarmicAnalysis,
    LifeLineAnalysis,
    NumerologyProfile,
)

MASTER_NUMBERS = frozenset({11, 22, 33})
KARMIC_DEBT_NUMBERS = (13, 14, 16, 19)

# day number: (ruling planet, characteristics, strengths, challenges, lucky colors, lucky numbers)
DAY_BORN: dict[int, tuple[str, list[str], list[str], list[str], list[str], list[int]]] = {
    1: ("Sun",
        ["Leadership", "Independence", "Innovation", "Ambition"],
        ["Natural leader", "Creative thinker", "Self-motivated", "Pioneering spirit"],
        ["Can be domineering", "Impatient", "Stubborn"],
        ["Gold", "Orange", "Yellow"],
        [1, 10, 19, 28]),
    2: ("Moon",
        ["Diplomacy", "Sensitivity", "Cooperation", "Intuition"],
        ["Excellent mediator", "Empathetic", "Detail-oriented", "Patient"],
        ["Overly sensitive", "Indecisive", "Dependent on others"],
        ["White", "Silver", "Cream"],
        [2, 11, 20, 29]),
    3: ("Jupiter",
        ["Creativity", "Expression", "Optimism", "Social"],
        ["Excellent communicator", "Artistic", "Enthusiastic", "Inspiring"],
        ["Scattered energy", "Superficial", "Extravagant"],
        ["Purple", "Blue", "Pink"],
        [3, 12, 21, 30]),
    4: ("Rahu (North Node)",
        ["Stability", "Hard work", "Discipline", "Practicality"],
        ["Reliable", "Organized", "Strong work ethic", "Detail-focused"],
        ["Rigid", "Overly serious", "Resistant to change"],
        ["Grey", "Blue", "Black"],
        [4, 13, 22, 31]),
    5: ("Mercury",
        ["Freedom", "Adventure", "Versatility", "Communication"],
        ["Adaptable", "Quick thinker", "Curious", "Energetic"],
        ["Restless", "Impulsive", "Inconsistent"],
        ["Green", "Light colors"],
        [5, 14, 23]),
    6: ("Venus",
        ["Harmony", "Responsibility", "Love", "Service"],
        ["Nurturing", "Artistic", "Diplomatic", "Compassionate"],
        ["Perfectionist", "Worrying", "Self-sacrificing"],
        ["Blue", "Pink", "White"],
        [6, 15, 24]),
    7: ("Ketu (South Node)",
        ["Spirituality", "Analysis", "Introspection", "Wisdom"],
        ["Deep thinker", "Intuitive", "Spiritual", "Analytical"],
        ["Isolated", "Overly critical", "Secretive"],
        ["Purple", "Violet", "Sea green"],
        [7, 16, 25]),
    8: ("Saturn",
        ["Ambition", "Authority", "Material success", "Karma"],
        ["Powerful", "Determined", "Business-minded", "Resilient"],
        ["Workaholic", "Materialistic", "Controlling"],
        ["Black", "Dark blue", "Grey"],
        [8, 17, 26]),
    9: ("Mars",
        ["Compassion", "Completion", "Humanitarianism", "Courage"],
        ["Generous", "Idealistic", "Brave", "Inspirational"],
        ["Impulsive", "Aggressive", "Impatient"],
        ["Red", "Crimson", "Pink"],
        [9, 18, 27]),
    11: ("Moon (Master Number)",
         ["Intuition", "Inspiration", "Enlightenment", "Idealism"],
         ["Visionary", "Spiritual teacher", "Highly intuitive", "Inspirational"],
         ["Overly idealistic", "Nervous energy", "Impractical"],
         ["Silver", "White", "Light blue"],
         [11, 29]),
    22: ("Sun (Master Number)",
         ["Master builder", "Vision", "Practical idealism", "Leadership"],
         ["Manifesting dreams", "Powerful", "Visionary", "Practical"],
         ["Overwhelming responsibility", "High expectations", "Stress"],
         ["Gold", "Coral", "Red"],
         [22]),
}

# life path: (description, purpose, talents, challenges, career, relationships)
LIFE_LINES: dict[int, tuple[str, str, list[str], list[str], list[str], str]] = {
    1: ("The Leader - You are here to develop independence, courage, and leadership.",
        "To pioneer new ideas and inspire others through your originality and determination.",
        ["Leadership", "Innovation", "Independence", "Courage", "Determination"],
        ["Learning to balance independence with cooperation", "Avoiding arrogance", "Patience with others"],
        ["Entrepreneur", "Executive", "Innovator", "Designer", "Director"],
        "You need a partner who respects your independence and supports your ambitions."),
    2: ("The Peacemaker - You are here to develop cooperation, diplomacy, and harmony.",
        "To bring people together and create peace through understanding and sensitivity.",
        ["Diplomacy", "Mediation", "Empathy", "Patience", "Attention to detail"],
        ["Building self-confidence", "Avoiding over-sensitivity", "Making decisions independently"],
        ["Counselor", "Mediator", "Diplomat", "Teacher", "Healthcare"],
        "You thrive in partnerships and need emotional connection and harmony."),
    3: ("The Creative Communicator - You are here to express yourself and inspire joy.",
        "To uplift others through creativity, communication, and optimism.",
        ["Communication", "Creativity", "Optimism", "Social skills", "Artistic expression"],
        ["Focusing energy", "Avoiding superficiality", "Managing finances"],
        ["Writer", "Artist", "Entertainer", "Designer", "Marketing"],
        "You need a partner who appreciates your creativity and gives you freedom to express."),
    4: ("The Builder - You are here to create stability and build lasting foundations.",
        "To establish order, security, and practical systems that benefit others.",
        ["Organization", "Discipline", "Reliability", "Hard work", "Practical thinking"],
        ["Flexibility", "Avoiding rigidity", "Work-life balance"],
        ["Engineer", "Architect", "Accountant", "Manager", "Craftsperson"],
        "You need a stable, committed partner who shares your values and work ethic."),
    5: ("The Freedom Seeker - You are here to experience life fully and embrace change.",
        "To explore the world, embrace freedom, and help others adapt to change.",
        ["Adaptability", "Communication", "Curiosity", "Energy", "Versatility"],
        ["Commitment", "Focus", "Avoiding excess"],
        ["Travel", "Sales", "Marketing", "Journalism", "Consulting"],
        "You need a partner who values freedom and adventure as much as you do."),
    6: ("The Nurturer - You are here to serve, heal, and create harmony.",
        "To care for others and create beauty, balance, and harmony in the world.",
        ["Nurturing", "Responsibility", "Compassion", "Artistic sense", "Healing"],
        ["Avoiding perfectionism", "Setting boundaries", "Self-care"],
        ["Healthcare", "Teaching", "Counseling", "Interior design", "Hospitality"],
        "You are devoted and need a partner who appreciates your caring nature."),
    7: ("The Seeker - You are here to search for truth and develop wisdom.",
        "To analyze, understand, and share spiritual and intellectual insights.",
        ["Analysis", "Intuition", "Spirituality", "Research", "Wisdom"],
        ["Trusting others", "Avoiding isolation", "Practical application"],
        ["Researcher", "Analyst", "Spiritual teacher", "Scientist", "Philosopher"],
        "You need a partner who respects your need for solitude and intellectual depth."),
    8: ("The Powerhouse - You are here to achieve material success and empower others.",
        "To master the material world and use power and resources wisely.",
        ["Business acumen", "Leadership", "Ambition", "Organization", "Resilience"],
        ["Work-life balance", "Avoiding materialism", "Sharing power"],
        ["Business owner", "Executive", "Finance", "Real estate", "Law"],
        "You need a partner who is equally ambitious and respects your drive for success."),
    9: ("The Humanitarian - You are here to serve humanity and complete cycles.",
        "To give back to the world through compassion, wisdom, and selfless service.",
        ["Compassion", "Idealism", "Generosity", "Wisdom", "Artistic talent"],
        ["Letting go", "Avoiding martyrdom", "Practical boundaries"],
        ["Nonprofit", "Healing arts", "Teaching", "Arts", "Social work"],
        "You need a partner who shares your humanitarian values and ideals."),
    11: ("The Spiritual Messenger - You are here to inspire and enlighten others.",
         "To channel spiritual insights and inspire others toward higher consciousness.",
         ["Intuition", "Inspiration", "Spiritual insight", "Idealism", "Charisma"],
         ["Grounding energy", "Practical application", "Managing sensitivity"],
         ["Spiritual teacher", "Healer", "Artist", "Motivational speaker", "Counselor"],
         "You need a spiritually aware partner who supports your mission."),
    22: ("The Master Builder - You are here to manifest grand visions into reality.",
         "To build lasting legacies that benefit humanity on a large scale.",
         ["Visionary thinking", "Practical manifestation", "Leadership", "Organization", "Ambition"],
         ["Managing stress", "Balancing idealism with practicality", "Patience"],
         ["Architect", "Urban planner", "CEO", "Visionary entrepreneur", "Systems designer"],
         "You need a partner who understands your grand vision and supports your mission."),
    33: ("The Master Teacher - You are here to uplift humanity through love and service.",
         "To teach, heal, and serve humanity with unconditional love and compassion.",
         ["Healing", "Teaching", "Compassion", "Wisdom", "Selfless service"],
         ["Avoiding martyrdom", "Self-care", "Setting boundaries"],
         ["Spiritual teacher", "Healer", "Humanitarian leader", "Counselor", "Philanthropist"],
         "You need a partner who shares your commitment to service and spiritual growth."),
}

KARMIC_LESSONS: dict[int, str] = {
    13: "Learn discipline and hard work. Past life: Laziness or avoiding responsibility. "
        "This life: Build through effort and perseverance.",
    14: "Learn moderation and balance. Past life: Excess and addiction. "
        "This life: Find balance in all areas, especially freedom and responsibility.",
    16: "Learn humility and spiritual growth. Past life: Ego and misuse of power. "
        "This life: Rebuild from ground up with humility and integrity.",
    19: "Learn independence and selflessness. Past life: Abuse of power and selfishness. "
        "This life: Balance personal power with service to others.",
}

KARMIC_GUIDANCE = (
    "Karmic debt indicates lessons from past lives that need to be resolved. "
    "These challenges are opportunities for spiritual growth. Face them with awareness, "
    "patience, and commitment to personal development."
)
NO_KARMIC_GUIDANCE = (
    "No major karmic debt detected. Your soul has learned key lessons in past lives. "
    "Focus on fulfilling your life purpose and helping others on their journey."
)


def reduce_keeping_masters(value: int) -> int:
    value = abs(int(value))
    while value > 9 and value not in MASTER_NUMBERS:
        value = sum(int(digit) for digit in str(value))
    return value


def analyze_day_born(birth: date | datetime | str) -> DayBornAnalysis:
    day_number = reduce_keeping_masters(coerce_date(birth).day)
    planet, characteristics, strengths, challenges, colors, numbers = DAY_BORN[day_number]
    return DayBornAnalysis(
        day_number=day_number,
        ruling_planet=planet,
        characteristics=list(characteristics),
        strengths=list(strengths),
        challenges=list(challenges),
        lucky_colors=list(colors),
        lucky_numbers=list(numbers),
    )


def analyze_life_line(birth: date | datetime | str) -> LifeLineAnalysis:
    """Life path from the raw day + month + year sum, master numbers kept."""
    born = coerce_date(birth)
    number = reduce_keeping_masters(born.day + born.month + born.year)
    description, purpose, talents, challenges, career, relationships = LIFE_LINES[number]
    return LifeLineAnalysis(
        life_path_number=number,
        description=description,
        purpose=purpose,
        talents=list(talents),
        challenges=list(challenges),
        career=list(career),
        relationships=relationships,
    )


def analyze_karmic_numbers(birth: date | datetime | str) -> KarmicAnalysis:
    born = coerce_date(birth)
    reduced = [reduce_keeping_masters(n) for n in (born.day, born.month, born.year)]

    debts: list[int] = []
    if born.day in KARMIC_DEBT_NUMBERS:
        debts.append(born.day)
    total = sum(reduced)
    if total in KARMIC_DEBT_NUMBERS and total not in debts:
        debts.append(total)

    return KarmicAnalysis(
        has_karmic_debt=bool(debts),
        karmic_numbers=reduced,
        karmic_debt_numbers=debts,
        lessons=[KARMIC_LESSONS[n] for n in debts],
        guidance=KARMIC_GUIDANCE if debts else NO_KARMIC_GUIDANCE,
    )


def numerology_profile(birth: date | datetime | str) -> NumerologyProfile:
    return NumerologyProfile(
        date_of_birth=coerce_date(birth).isoformat(),
        day_born=analyze_day_born(birth),
        life_line=analyze_life_line(birth),
        karmic=analyze_karmic_numbers(birth),
    )
