import numbers

import streamlit as st

from shelter_food.errors import OrderValidationError
from shelter_food.models import OrderConfig
from shelter_food.order import explain_order
from shelter_food.settings import env_overrides, env_var

st.set_page_config(page_title="Shelter Food Order", page_icon="🐶", layout="centered")
st.title("🐶 Monthly dog-food order")

# Settings from SHELTER_FOOD_* seed the inputs below. A value that is not a
# usable number gets no input and goes to the calculator as is, which
# reports it.
defaults = OrderConfig().with_overrides(env_overrides())


def is_whole(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def is_rate(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def rate_input(field: str, label: str):
    value = getattr(defaults, field)
    if not is_rate(value):
        st.warning(f"{env_var(field)}={value!r} is not a number")
        return None
    return st.number_input(label, value=float(value), step=1.0)


def whole_input(field: str, label: str):
    value = getattr(defaults, field)
    if not is_whole(value):
        st.warning(f"{env_var(field)}={value!r} is not an integer")
        return None
    return int(st.number_input(label, value=int(value), step=1))


st.sidebar.markdown("### Shelter settings")
with st.sidebar.expander("Overrides", expanded=False):
    edited = {
        "consumption_small": rate_input("consumption_small", "Small dog lbs / month (min 5)"),
        "consumption_medium": rate_input("consumption_medium", "Medium dog lbs / month (min 10)"),
        "consumption_large": rate_input("consumption_large", "Large dog lbs / month (min 15)"),
        "max_dogs": whole_input("max_dogs", "Max # dogs"),
        "over_order_percent": whole_input("over_order_percent", "Over-order %"),
    }

st.header("Current census")
cols = st.columns(3)
small = cols[0].number_input("Small dogs", min_value=0, value=0, step=1)
medium = cols[1].number_input("Medium dogs", min_value=0, value=0, step=1)
large = cols[2].number_input("Large dogs", min_value=0, value=0, step=1)
leftover = st.number_input("Leftover food (lbs)", min_value=0.0, value=0.0, step=0.5)

config = defaults.with_overrides(edited)

try:
    breakdown = explain_order(int(small), int(medium), int(large), float(leftover), config)
except OrderValidationError as exc:
    st.error(exc.message)
else:
    st.metric("Order for next month", f"{breakdown.order_lbs:.1f} lbs")
    st.dataframe(
        [
            {"step": "monthly need", "lbs": breakdown.monthly_need},
            {"step": "leftover", "lbs": breakdown.leftover_lbs},
            {"step": "deficit", "lbs": breakdown.deficit},
            {"step": f"+{breakdown.over_order_percent}% buffer", "lbs": breakdown.order_lbs},
        ],
        use_container_width=True,
    )
