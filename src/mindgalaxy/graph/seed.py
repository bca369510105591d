"""Demo galaxy: one hundred thoughts in ten themed rings."""

import math
import random

from mindgalaxy.models import Thought
from mindgalaxy.models.thought import now_ms

MINDFUL_PALETTE = ("#e2e8f0", "#cbd5e1", "#f1f5f9", "#e0f2fe", "#f0f9ff")

THOUGHTS_BY_THEME: tuple[tuple[str, ...], ...] = (
    # AI & Technology
    (
        "Will AI replace my job or augment it?",
        "ChatGPT feels more human than some people I know",
        "Need to learn Python before it's too late",
        "The singularity might happen in our lifetime",
        "Why is debugging so satisfying when it finally works?",
        "Open source is humanity's greatest collaboration",
        "Should I be worried about my digital privacy?",
        "Quantum computing sounds like magic",
        "My entire life is backed up in the cloud",
        "Code is poetry for machines",
    ),
    # Philosophy & Meaning
    (
        "What if this is all a simulation?",
        "Do we have free will or is everything predetermined?",
        "The meaning of life keeps changing as I age",
        "Existential dread hits different at 3am",
        "Maybe happiness isn't the goal, growth is",
        "We're all just atoms that learned to think about atoms",
        "Death gives life meaning, not the other way around",
        "Am I the same person I was 10 years ago?",
        "Consciousness might be the universe experiencing itself",
        "Every decision creates a parallel universe I'll never see",
    ),
    # Creativity & Art
    (
        "Writer's block is just fear in disguise",
        "The best ideas come when I'm not trying",
        "Music is mathematics made emotional",
        "Every artist steals, the great ones just hide it better",
        "Imperfection makes art more human",
        "I want to create something that outlives me",
        "The blank canvas is both terrifying and thrilling",
        "Photography captures moments we'd otherwise forget",
        "Dancing is the body's way of speaking",
        "Abstract art makes me feel things I can't explain",
    ),
    # Nature & Environment
    (
        "Climate change keeps me up at night",
        "There's something healing about being near water",
        "The stars remind me how small my problems are",
        "Trees have been here longer than human civilization",
        "Ocean waves follow the same patterns as brain waves",
        "Every sunset is proof that endings can be beautiful",
        "Nature doesn't hurry yet everything gets accomplished",
        "The smell of petrichor is better than any perfume",
        "Mountains make me feel grounded and free simultaneously",
        "Bees are dying and nobody seems to care enough",
    ),
    # Relationships & Social
    (
        "I need to be better at keeping in touch",
        "Loneliness and solitude are completely different things",
        "My parents are aging faster than I want to admit",
        "Real friendship is rare and precious",
        "Social media made us connected but more alone",
        "Love is choosing someone every single day",
        "I miss the friends I had before we got busy with life",
        "Empathy is a superpower we don't teach enough",
        "Family isn't always blood",
        "Quality time beats expensive gifts every time",
    ),
    # Health & Wellness
    (
        "I should drink more water",
        "Sleep is not optional, it's essential",
        "Mental health is just as important as physical health",
        "Exercise is the closest thing we have to a miracle drug",
        "Meditation is hard because our minds aren't used to stillness",
        "Nutrition science changes every decade",
        "Burnout is real and I might be experiencing it",
        "Walking in nature is free therapy",
        "Breathwork can literally change your nervous system",
        "Rest is productive, not lazy",
    ),
    # Career & Work
    (
        "Imposter syndrome never really goes away",
        "Should I take the safe path or follow my passion?",
        "My dream job might not even exist yet",
        "Work-life balance is a myth, it's work-life integration",
        "Networking feels fake but it works",
        "Skills are more valuable than degrees now",
        "Remote work changed everything",
        "Automation will eliminate jobs but create new ones",
        "The hustle culture is toxic",
        "Mentorship accelerates growth exponentially",
    ),
    # Travel & Adventure
    (
        "I want to visit Japan during cherry blossom season",
        "Solo travel is the best way to find yourself",
        "Every country I visit expands my perspective",
        "Travel is the only thing you buy that makes you richer",
        "I want to hike the Inca Trail before I'm too old",
        "Getting lost in a new city is scary and exciting",
        "Food is the best way to understand a culture",
        "I collect experiences, not things",
        "The Northern Lights are on my bucket list",
        "Traveling alone means eating dinner at weird hours",
    ),
    # Food & Cooking
    (
        "Homemade pasta tastes like love and effort",
        "Cooking is chemistry you can eat",
        "The best meals are shared with good company",
        "Fermentation is controlled rot that tastes amazing",
        "I want to master sourdough bread",
        "Spices tell the story of human exploration",
        "Meal prep on Sunday saves my weeknight sanity",
        "Coffee is a ritual, not just caffeine",
        "Chocolate is proof that God loves us",
        "Farmers markets connect me to my food source",
    ),
    # Science & Learning
    (
        "The universe is expanding faster than we thought",
        "Neuroplasticity means I can change at any age",
        "CRISPR will revolutionize medicine",
        "Dark matter is 85% of the universe and we barely understand it",
        "Learning a new language rewires your brain",
        "The human body is a universe of microorganisms",
        "Space is silent because there's no medium for sound",
        "Evolution is still happening in humans",
        "Math is the language of the universe",
        "We've only explored 5% of the ocean",
    ),
)


def solid_gradient(color: str) -> str:
    return f"linear-gradient(135deg, {color}, {color})"


def seed_thoughts(rng: random.Random | None = None) -> list[Thought]:
    """Generate the demo galaxy.

    Themes sit on a ring of radius 400-600; each theme's thoughts orbit their
    theme center at 50-150. Within a theme every ordered pair links with
    probability 0.4 at weight 0.6-0.95; each thought also gets up to two weak
    (0.3-0.5) links into other themes.
    """
    rng = rng or random.Random()
    created = now_ms()
    thoughts: list[Thought] = []
    theme_count = len(THOUGHTS_BY_THEME)

    next_id = 1
    for theme_idx, contents in enumerate(THOUGHTS_BY_THEME):
        angle = theme_idx / theme_count * math.pi * 2
        ring_radius = 400 + rng.random() * 200
        center_x = math.cos(angle) * ring_radius
        center_y = math.sin(angle) * ring_radius

        for node_idx, content in enumerate(contents):
            local_angle = node_idx / len(contents) * math.pi * 2
            local_radius = 50 + rng.random() * 100
            color = rng.choice(MINDFUL_PALETTE)
            thoughts.append(
                Thought(
                    id=str(next_id),
                    content=content,
                    x=center_x + math.cos(local_angle) * local_radius,
                    y=center_y + math.sin(local_angle) * local_radius,
                    color=color,
                    gradient=solid_gradient(color),
                    created_at=created - (100 - next_id) * 1000,
                )
            )
            next_id += 1

    theme_size = len(THOUGHTS_BY_THEME[0])
    for idx, thought in enumerate(thoughts):
        theme_idx = idx // theme_size
        start = theme_idx * theme_size
        end = min(start + theme_size, len(thoughts))

        for other_idx in range(start, end):
            if other_idx == idx:
                continue
            if rng.random() < 0.4:
                thought.connections[thoughts[other_idx].id] = 0.6 + rng.random() * 0.35

        for _ in range(rng.randrange(3)):
            target_idx = rng.randrange(len(thoughts))
            if target_idx // theme_size != theme_idx:
                thought.connections[thoughts[target_idx].id] = 0.3 + rng.random() * 0.2

    return thoughts
