import logging
import random
from typing import Optional

import streamlit as st

logger = logging.getLogger(__name__)

SPACE_FACTS = [
    "A day on Venus is longer than a year on Venus because it rotates very slowly.",
    "There are more stars in the observable universe than grains of sand on all Earth's beaches.",
    "Neutron stars can spin hundreds of times per second and are so dense a teaspoon would weigh billions of tons.",
    "A spoonful of a white dwarf would weigh about a million tons on Earth.",
    "Saturn could float in water because it's mostly made of gas and is less dense than water.",
    "Jupiter's Great Red Spot is a storm larger than Earth that has been raging for centuries.",
    "Space is not completely empty. It contains tiny amounts of gas, dust, and cosmic rays.",
    "The footprints left on the Moon will likely remain for millions of years because there is no wind to erase them.",
]

def random_fact(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(SPACE_FACTS)

def render_did_you_know():
    """Sidebar fact, picked once per session. Purely decorative, so failures are only logged."""
    try:
        if "space_fact" not in st.session_state:
            st.session_state.space_fact = random_fact()
        with st.sidebar.expander("💡 Did You Know?", expanded=True):
            st.write(st.session_state.space_fact)
    except Exception as e:
        logger.debug("Skipping fact of the day: %s", e)
