"""
Hypothesis test strategies for empresa_branding.

Provides reusable generators for property-based testing.
"""

import string

from hypothesis import strategies as st

from tests.fakes import make_row


# Strategy for valid slugs
slug_strategy = st.text(
    alphabet=string.ascii_lowercase + string.digits + "-",
    min_size=3,
    max_size=50,
).filter(
    lambda s: s and not s.startswith("-") and not s.endswith("-") and "--" not in s
)

# Strategy for production domain names
domain_strategy = st.from_regex(
    r"[a-z][a-z0-9]{2,20}\.(com|com\.br|net|io|app)",
    fullmatch=True,
)

# Strategy for CSS hex colors
hex_color_strategy = st.from_regex(r"#[0-9A-Fa-f]{6}", fullmatch=True)

# A color column as stored: set, null or blank
color_column_strategy = st.one_of(
    hex_color_strategy,
    st.none(),
    st.just(""),
    st.just("   "),
)

logo_column_strategy = st.one_of(
    st.none(),
    st.just(""),
    st.from_regex(r"https://cdn\.example\.com/[a-z]{3,10}\.png", fullmatch=True),
)


@st.composite
def tenant_row_strategy(draw, slug=None):
    """Generate an active ``empresas`` row with any mix of null colors."""
    return make_row(
        slug or draw(slug_strategy),
        dominio=draw(st.one_of(st.none(), domain_strategy)),
        logo_url=draw(logo_column_strategy),
        cor_primary=draw(color_column_strategy),
        cor_accent=draw(color_column_strategy),
        cor_bg=draw(color_column_strategy),
        cor_text=draw(color_column_strategy),
    )
