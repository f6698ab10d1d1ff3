"""Canned stylist comments and tips for locally matched outfits."""

from __future__ import annotations

import random

# Checked in order; the first group with a keyword in the prompt wins.
COMMENT_GROUPS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("date", ("date", "dinner")),
    ("work", ("work", "office", "meeting", "interview")),
    ("gym", ("gym", "workout", "exercise")),
    ("party", ("party", "night out", "club")),
    ("casual", ("casual", "chill", "relaxed")),
    ("cold", ("cold", "winter", "rain")),
    ("summer", ("summer", "hot", "beach")),
)

COMMENTS: dict[str, tuple[str, ...]] = {
    "date": (
        "This look strikes the perfect balance between effort and effortlessness - you'll definitely make an impression!",
        "I've put together something that says 'I care' without trying too hard. Confidence is your best accessory tonight!",
        "This combo is giving sophisticated but approachable vibes - exactly what you want for tonight!",
    ),
    "work": (
        "Clean, professional, and polished - you'll command the room with this look!",
        "This outfit says 'I mean business' while still showing off your personal style.",
        "Power dressing at its finest - you've got this! Ready to conquer the day.",
    ),
    "gym": (
        "Functional meets fashionable - you'll look great crushing those goals!",
        "Comfort and style for your workout - no excuses not to hit it hard today!",
        "Athletic chic! You'll feel as good as you look during your session.",
    ),
    "party": (
        "You're going to turn heads with this look! Get ready to own the night!",
        "Statement-making and memorable - this outfit is pure main character energy!",
        "Party-ready and fabulous! The dancefloor won't know what hit it.",
    ),
    "casual": (
        "Effortlessly cool and comfortable - the perfect laid-back look!",
        "Casual doesn't mean boring - this combo keeps it stylish while keeping you comfy.",
        "Easy, breezy, and totally you - perfect for wherever the day takes you!",
    ),
    "cold": (
        "Cozy meets chic! You'll stay warm without sacrificing style.",
        "Layered to perfection - this look will keep you toasty and looking great!",
        "Weather-ready and fashionable - bring on the elements!",
    ),
    "summer": (
        "Light, fresh, and perfect for soaking up the sun!",
        "Summer vibes all the way - cool, comfortable, and camera-ready!",
        "This breezy look will keep you cool while looking hot!",
    ),
    "default": (
        "A versatile combination that works for wherever your day takes you!",
        "I've picked pieces that complement each other beautifully - you're all set!",
        "This thoughtfully curated look balances style and practicality perfectly.",
        "A winning combination! You'll feel confident and put-together all day.",
        "These pieces work so well together - sometimes the classics just hit different!",
    ),
}

TIP_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("interview", "meeting"), "Pro tip: Arrive 10 minutes early so you can settle in with confidence!"),
    (("date",), "Remember: a genuine smile is the best accessory you can wear!"),
    (("gym",), "Don't forget to stretch before and after - you've got this!"),
    (("cold", "winter"), "Layer smart: you can always take off a layer if you warm up!"),
    (("party",), "Wear what makes YOU feel amazing - confidence is contagious!"),
)

DEFAULT_TIPS: tuple[str, ...] = (
    "Confidence is your best accessory - wear it proudly!",
    "When in doubt, accessories can elevate any look!",
    "The right outfit can change your whole mood - own it!",
    "Style tip: make sure your shoes are clean - it's the details that count!",
)


def comment_group(prompt: str) -> str:
    """Return the comment pool key for a prompt."""

    lower = prompt.lower()
    for group, keywords in COMMENT_GROUPS:
        if any(keyword in lower for keyword in keywords):
            return group
    return "default"


def outfit_comment(prompt: str, rng: random.Random) -> str:
    return rng.choice(COMMENTS[comment_group(prompt)])


def style_tip(prompt: str, rng: random.Random) -> str:
    lower = prompt.lower()
    for keywords, tip in TIP_RULES:
        if any(keyword in lower for keyword in keywords):
            return tip
    return rng.choice(DEFAULT_TIPS)
