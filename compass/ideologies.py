"""
compass.ideologies — Static ideology catalogue.

Every primary label carries a fixed, independently authored metadata bundle.
Secondary-only labels (Centrist, Accelerationist Tendencies, Post-Liberal,
Anarchist Sympathies) carry a one-line summary only.

Nothing in this module is computed. Bundles are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

FALGSC = "Fully Automated Luxury Gay Space Communist"
LIBERTARIAN_SOCIALIST = "Libertarian Socialist"
SOCIAL_LIBERAL = "Social Liberal"
CRYPTO_ANARCHIST = "Crypto-Anarchist"
CLASSICAL_LIBERAL = "Classical Liberal"
MODERATE_LIBERTARIAN = "Moderate Libertarian"
ECO_SOCIALIST = "Eco-Socialist"
SOCIAL_DEMOCRAT = "Social Democrat"
NEO_REACTIONARY = "Neo-Reactionary"
ALT_RIGHT = "Alt-Right"
CONSERVATIVE = "Conservative"

CENTRIST = "Centrist"
ACCELERATIONIST = "Accelerationist Tendencies"
POST_LIBERAL = "Post-Liberal"
ANARCHIST_SYMPATHIES = "Anarchist Sympathies"

PRIMARY_LABELS: tuple[str, ...] = (
    FALGSC,
    LIBERTARIAN_SOCIALIST,
    SOCIAL_LIBERAL,
    CRYPTO_ANARCHIST,
    CLASSICAL_LIBERAL,
    MODERATE_LIBERTARIAN,
    ECO_SOCIALIST,
    SOCIAL_DEMOCRAT,
    NEO_REACTIONARY,
    ALT_RIGHT,
    CONSERVATIVE,
)

SECONDARY_ONLY_LABELS: tuple[str, ...] = (
    CENTRIST,
    ACCELERATIONIST,
    POST_LIBERAL,
    ANARCHIST_SYMPATHIES,
)

VALID_PRIMARY_LABELS: frozenset[str] = frozenset(PRIMARY_LABELS)


# ---------------------------------------------------------------------------
# Bundle types
# ---------------------------------------------------------------------------

class NotableFigure(BaseModel):
    model_config = {"frozen": True}

    name: str
    role: str


@dataclass(frozen=True)
class IdeologyBundle:
    label: str
    description: str
    characteristics: tuple[str, ...]
    notable_figures: tuple[NotableFigure, ...]
    modern_context: str
    color: str


def _figures(*pairs: tuple[str, str]) -> tuple[NotableFigure, ...]:
    return tuple(NotableFigure(name=name, role=role) for name, role in pairs)


# ---------------------------------------------------------------------------
# Primary bundles
# ---------------------------------------------------------------------------

IDEOLOGY_BUNDLES: dict[str, IdeologyBundle] = {
    FALGSC: IdeologyBundle(
        label=FALGSC,
        description=(
            "You envision a post-scarcity future where advanced technology eliminates work, "
            "LGBTQ+ rights are universal, and humanity expands to the stars under a communist system."
        ),
        characteristics=(
            "Believes in complete automation of labor through AI and robotics",
            "Supports universal LGBTQ+ rights and gender liberation",
            "Advocates for space exploration and colonization",
            "Envisions a post-scarcity communist society",
            "Embraces radical technological acceleration",
        ),
        notable_figures=_figures(
            ("Fully Automated Luxury Communism", "Theoretical Framework"),
            ("Mark Fisher", "Cultural Theorist"),
            ("Donna Haraway", "Cyborg Feminist"),
        ),
        modern_context=(
            "This ideology combines accelerationist technology with queer liberation and "
            "communist economics, popular in online leftist spaces."
        ),
        color="#FF69B4",
    ),
    LIBERTARIAN_SOCIALIST: IdeologyBundle(
        label=LIBERTARIAN_SOCIALIST,
        description=(
            "You believe in maximum individual freedom combined with collective ownership of the "
            "means of production. You oppose both state control and corporate capitalism."
        ),
        characteristics=(
            "Strong support for civil liberties and personal freedom",
            "Advocates for worker ownership and democratic workplaces",
            "Opposes both government and corporate authoritarianism",
            "Supports decentralized, community-based decision making",
        ),
        notable_figures=_figures(
            ("Noam Chomsky", "Linguist & Political Activist"),
            ("Murray Bookchin", "Social Ecologist"),
            ("Peter Kropotkin", "Anarchist Theorist"),
        ),
        modern_context="Popular among young progressives who distrust both big government and big corporations.",
        color="#10B981",
    ),
    SOCIAL_LIBERAL: IdeologyBundle(
        label=SOCIAL_LIBERAL,
        description="You support a mixed economy with strong social programs while maintaining individual freedoms.",
        characteristics=(
            "Supports progressive taxation and social safety nets",
            "Strong advocate for civil rights and liberties",
            "Believes in regulated capitalism with worker protections",
            "Supports environmental protection and social justice",
        ),
        notable_figures=_figures(
            ("Alexandria Ocasio-Cortez", "US Representative"),
            ("Bernie Sanders", "US Senator"),
            ("John Rawls", "Political Philosopher"),
        ),
        modern_context="Mainstream progressive position in modern democratic societies.",
        color="#3B82F6",
    ),
    CRYPTO_ANARCHIST: IdeologyBundle(
        label=CRYPTO_ANARCHIST,
        description=(
            "You believe in using technology, especially blockchain and cryptography, to create a "
            "stateless society based on voluntary exchange and digital currencies."
        ),
        characteristics=(
            "Advocates for cryptocurrency replacing government money",
            "Supports complete digital privacy and anonymity",
            "Believes technology can eliminate the need for government",
            "Embraces radical decentralization of all institutions",
            "Supports unrestricted free markets in cyberspace",
        ),
        notable_figures=_figures(
            ("Satoshi Nakamoto", "Bitcoin Creator"),
            ("Timothy C. May", "Crypto-Anarchist Manifesto"),
            ("Ross Ulbricht", "Silk Road Founder"),
        ),
        modern_context=(
            "Emerging ideology combining libertarian economics with cutting-edge technology and digital rights."
        ),
        color="#F59E0B",
    ),
    CLASSICAL_LIBERAL: IdeologyBundle(
        label=CLASSICAL_LIBERAL,
        description="You support free markets and individual liberty with limited government intervention.",
        characteristics=(
            "Supports free market capitalism with minimal regulation",
            "Strong advocate for individual rights and freedoms",
            "Believes in limited government and fiscal responsibility",
            "Supports meritocracy and equal opportunity",
        ),
        notable_figures=_figures(
            ("Milton Friedman", "Economist"),
            ("Friedrich Hayek", "Economist & Philosopher"),
            ("Ron Paul", "Former US Representative"),
        ),
        modern_context="Traditional American conservative/libertarian position, popular in tech and business circles.",
        color="#EAB308",
    ),
    MODERATE_LIBERTARIAN: IdeologyBundle(
        label=MODERATE_LIBERTARIAN,
        description=(
            "You generally favor free markets and personal liberty while accepting some government role in society."
        ),
        characteristics=(
            "Supports most free market policies",
            "Values personal freedom and civil liberties",
            "Accepts limited government intervention when necessary",
            "Pragmatic approach to policy solutions",
        ),
        notable_figures=_figures(
            ("Gary Johnson", "Former Presidential Candidate"),
            ("Justin Amash", "Former US Representative"),
            ("Reason Magazine", "Libertarian Publication"),
        ),
        modern_context="Mainstream libertarian position in American politics.",
        color="#FBBF24",
    ),
    ECO_SOCIALIST: IdeologyBundle(
        label=ECO_SOCIALIST,
        description=(
            "You believe strong government action is necessary to address climate change and economic "
            "inequality, even if it requires restricting some individual freedoms."
        ),
        characteristics=(
            "Supports extensive government control to combat climate change",
            "Believes capitalism is incompatible with environmental protection",
            "Advocates for planned economy to reduce consumption",
            "Supports restrictions on individual behavior for collective good",
            "May support authoritarian measures for environmental protection",
        ),
        notable_figures=_figures(
            ("Greta Thunberg", "Climate Activist"),
            ("Extinction Rebellion", "Environmental Movement"),
            ("Joel Kovel", "Eco-Socialist Theorist"),
        ),
        modern_context=(
            "Growing movement combining environmental urgency with socialist economics and "
            "potentially authoritarian methods."
        ),
        color="#059669",
    ),
    SOCIAL_DEMOCRAT: IdeologyBundle(
        label=SOCIAL_DEMOCRAT,
        description=(
            "You support a strong welfare state and government regulation while maintaining democratic institutions."
        ),
        characteristics=(
            "Supports comprehensive welfare state",
            "Believes in progressive taxation and wealth redistribution",
            "Advocates for strong labor unions and worker rights",
            "Supports government regulation of business",
        ),
        notable_figures=_figures(
            ("Nordic Model", "Scandinavian Countries"),
            ("Elizabeth Warren", "US Senator"),
            ("Jeremy Corbyn", "Former UK Labour Leader"),
        ),
        modern_context="Popular European-style social democracy, gaining traction in American progressive politics.",
        color="#DC2626",
    ),
    NEO_REACTIONARY: IdeologyBundle(
        label=NEO_REACTIONARY,
        description=(
            "You believe democracy has failed and should be replaced with more efficient, hierarchical "
            "forms of governance, possibly including corporate city-states or monarchies."
        ),
        characteristics=(
            "Rejects democratic governance as inefficient",
            "Supports hierarchical social structures",
            "Believes in natural inequality between groups",
            "Advocates for corporate or monarchical governance",
            "Embraces technological acceleration under strong leadership",
        ),
        notable_figures=_figures(
            ("Curtis Yarvin", "Neo-Reactionary Theorist"),
            ("Nick Land", "Accelerationist Philosopher"),
            ("Peter Thiel", "Tech Entrepreneur"),
        ),
        modern_context=(
            "Emerging ideology in tech circles, influenced by Silicon Valley's frustration with democratic processes."
        ),
        color="#7C3AED",
    ),
    ALT_RIGHT: IdeologyBundle(
        label=ALT_RIGHT,
        description=(
            "You combine nationalist and traditionalist social views with skepticism of free-market "
            "economics, focusing on cultural preservation and identity."
        ),
        characteristics=(
            "Strong emphasis on cultural and ethnic nationalism",
            "Skeptical of globalization and multiculturalism",
            "Supports traditional gender roles and family structures",
            "May support economic protectionism",
            "Focuses on preserving Western/European culture",
        ),
        notable_figures=_figures(
            ("Richard Spencer", "White Nationalist"),
            ("Steve Bannon", "Political Strategist"),
            ("Tucker Carlson", "Media Personality"),
        ),
        modern_context=(
            "Movement that gained prominence during the 2016 election, combining nationalism with internet culture."
        ),
        color="#6B21A8",
    ),
    CONSERVATIVE: IdeologyBundle(
        label=CONSERVATIVE,
        description=(
            "You support free market principles combined with traditional social values and strong institutions."
        ),
        characteristics=(
            "Supports free market capitalism with some regulation",
            "Advocates for traditional family and social values",
            "Believes in strong law and order",
            "Supports gradual rather than radical change",
        ),
        notable_figures=_figures(
            ("Ronald Reagan", "40th US President"),
            ("Margaret Thatcher", "Former UK Prime Minister"),
            ("Ben Shapiro", "Political Commentator"),
        ),
        modern_context="Traditional conservative position, dominant in Republican politics.",
        color="#8B5CF6",
    ),
}


# ---------------------------------------------------------------------------
# One-line summaries — every label a profile can mention
# ---------------------------------------------------------------------------

IDEOLOGY_SUMMARIES: dict[str, str] = {
    FALGSC: (
        "Envisions a post-scarcity future with advanced technology, universal LGBTQ+ rights, "
        "and communist expansion to space."
    ),
    LIBERTARIAN_SOCIALIST: (
        "Advocates for maximal individual freedom alongside collective ownership of production, "
        "opposing state and corporate control."
    ),
    SOCIAL_LIBERAL: "Supports a mixed economy with strong social safety nets and robust individual freedoms and rights.",
    CRYPTO_ANARCHIST: (
        "Advocates for using technology like cryptography and digital currencies to create a "
        "stateless, voluntary society."
    ),
    CLASSICAL_LIBERAL: (
        "Emphasizes free markets, individual liberty, and limited government intervention in "
        "economic and personal life."
    ),
    MODERATE_LIBERTARIAN: (
        "Favors free markets and personal liberty while accepting a pragmatic, limited role for "
        "government in certain areas."
    ),
    ECO_SOCIALIST: (
        "Believes strong state action is vital to address climate change and inequality, "
        "potentially restructuring the economy on socialist lines."
    ),
    SOCIAL_DEMOCRAT: (
        "Supports a strong welfare state, government regulation, and democratic institutions to "
        "achieve social and economic equality."
    ),
    NEO_REACTIONARY: (
        "Rejects democracy for more hierarchical governance models, sometimes envisioning "
        "corporate city-states or monarchies."
    ),
    ALT_RIGHT: "Focuses on cultural preservation and identity, often with nationalist and traditionalist social views.",
    CONSERVATIVE: (
        "Supports free-market principles combined with traditional social values and strong, "
        "established institutions."
    ),
    CENTRIST: (
        "Holds a moderate political position, balancing elements from different ideologies to "
        "find pragmatic solutions."
    ),
    ACCELERATIONIST: (
        "Believes in accelerating societal change, often through technology or radical politics, "
        "towards a transformed future."
    ),
    POST_LIBERAL: (
        "Critiques aspects of classical liberalism, often emphasizing community, tradition, or "
        "new forms of social order."
    ),
    ANARCHIST_SYMPATHIES: (
        "Expresses affinity with anarchist ideals such as decentralization, voluntary association, "
        "and skepticism of authority."
    ),
}

MISSING_SUMMARY = "Description not available."


def get_bundle(label: str) -> IdeologyBundle:
    """Metadata bundle for a primary label. Raises KeyError otherwise."""
    if label not in IDEOLOGY_BUNDLES:
        raise KeyError(f"No metadata bundle for ideology: '{label}'")
    return IDEOLOGY_BUNDLES[label]


def get_summary(label: str) -> str:
    """One-line summary for any label, or MISSING_SUMMARY."""
    return IDEOLOGY_SUMMARIES.get(label, MISSING_SUMMARY)
