"""
Static domain tables for the visibility audit.

Every table is keyed by CategoryId and treated as read-only configuration.
Lookups fall back to the documented default when a category is unknown.
"""

from types import MappingProxyType

from models.schemas import CategoryId, Platform


# Categories shown to users, with example brands
CATEGORIES = (
    {"id": CategoryId.BEAUTY, "label": "Beauty & Skincare", "examples": "Mamaearth, mCaffeine, Sugar Cosmetics, Minimalist"},
    {"id": CategoryId.FOOD, "label": "Food & Beverages", "examples": "Licious, Country Delight, Vahdam, Yogabar"},
    {"id": CategoryId.HEALTH, "label": "Health & Wellness", "examples": "HealthKart, Plix, Kapiva, Wow Skin Science"},
    {"id": CategoryId.FASHION, "label": "Fashion & Apparel", "examples": "Bewakoof, Snitch, The Souled Store, Urbanic"},
    {"id": CategoryId.ELECTRONICS, "label": "Electronics & Gadgets", "examples": "boAt, Noise, Fire-Boltt, Portronics"},
    {"id": CategoryId.BABY, "label": "Baby & Kids", "examples": "FirstCry, The Moms Co, Mamaearth Baby"},
    {"id": CategoryId.HOME, "label": "Home & Living", "examples": "Wakefit, Sleepyhead, Pepperfry, Urban Ladder"},
    {"id": CategoryId.PET, "label": "Pet Care", "examples": "Supertails, Heads Up For Tails, Wiggles"},
)

CATEGORY_LABELS = MappingProxyType({c["id"]: c["label"] for c in CATEGORIES})

# Known brands per category for competitor detection (lowercase, fixed order)
KNOWN_BRANDS = MappingProxyType({
    CategoryId.BEAUTY: (
        "mamaearth", "mcaffeine", "sugar cosmetics", "minimalist", "plum", "nykaa",
        "wow skin science", "dot & key", "biotique", "lakme", "forest essentials",
        "kama ayurveda", "the body shop",
    ),
    CategoryId.FOOD: (
        "licious", "country delight", "vahdam", "yogabar", "true elements",
        "slurrp farm", "raw pressery", "epigamia", "good dot", "blue tokai",
    ),
    CategoryId.HEALTH: (
        "healthkart", "plix", "kapiva", "wow skin science", "oziva", "boldfit",
        "muscleblaze", "fast&up", "wellbeing nutrition", "gynoveda",
    ),
    CategoryId.FASHION: (
        "bewakoof", "snitch", "the souled store", "urbanic", "rare rabbit",
        "bonkers corner", "virgio", "freakins", "nobero", "damensch",
    ),
    CategoryId.ELECTRONICS: (
        "boat", "noise", "fire-boltt", "portronics", "ambrane", "ptron",
        "realme", "oneplus", "boult audio", "crossbeats",
    ),
    CategoryId.BABY: (
        "firstcry", "the moms co", "mamaearth baby", "mothercare", "himalaya baby",
        "johnsons baby", "chicco", "mee mee",
    ),
    CategoryId.HOME: (
        "wakefit", "sleepyhead", "pepperfry", "urban ladder", "duroflex",
        "the sleep company", "flo mattress", "sunday mattress",
    ),
    CategoryId.PET: (
        "supertails", "heads up for tails", "wiggles", "drools", "pedigree",
        "royal canin", "whiskas", "sheba",
    ),
})

# Communities AI answer engines cite heavily
SUBREDDITS = MappingProxyType({
    CategoryId.BEAUTY: ("r/IndianSkincareAddicts", "r/IndianMakeupAddicts", "r/SkincareAddiction"),
    CategoryId.FOOD: ("r/IndianFood", "r/Cooking", "r/HealthyFood"),
    CategoryId.HEALTH: ("r/IndianFitness", "r/Supplements", "r/Fitness"),
    CategoryId.FASHION: ("r/IndianFashionAddicts", "r/malefashionadvice", "r/streetwear"),
    CategoryId.ELECTRONICS: ("r/IndianGaming", "r/headphones", "r/gadgets"),
    CategoryId.BABY: ("r/IndianParenting", "r/beyondthebump", "r/Parenting"),
    CategoryId.HOME: ("r/IndianHomes", "r/HomeDecorating", "r/Mattress"),
    CategoryId.PET: ("r/IndianPets", "r/dogs", "r/cats"),
})
DEFAULT_SUBREDDITS = ("r/india",)

# Review and aggregator sites per category
AGGREGATOR_SITES = MappingProxyType({
    CategoryId.BEAUTY: ("Nykaa", "BeautyBargainIndia", "SkinKraft", "Purplle"),
    CategoryId.FOOD: ("Zomato", "FoodViva", "TasteAtlas", "YourStory"),
    CategoryId.HEALTH: ("HealthKart", "Nutrabay", "1mg", "PharmEasy"),
    CategoryId.FASHION: ("Myntra", "Ajio", "CRED", "Tata CLiQ"),
    CategoryId.ELECTRONICS: ("Gadgets360", "MySmartPrice", "GSMArena", "TechPP"),
    CategoryId.BABY: ("FirstCry", "BabyChakra", "ParentCircle"),
    CategoryId.HOME: ("SleepyOwl", "WoodenStreet", "HomeLane"),
    CategoryId.PET: ("Supertails", "PetIndia", "DogSpot"),
})
DEFAULT_AGGREGATOR_SITES = ("MouthShut", "Trustpilot", "Google Business Profile")

# Labels used in "Best ... in India" guide titles
GUIDE_LABELS = MappingProxyType({
    CategoryId.BEAUTY: "Skincare & Beauty Products",
    CategoryId.FOOD: "Food & Beverages",
    CategoryId.HEALTH: "Health & Wellness Supplements",
    CategoryId.FASHION: "Fashion Brands",
    CategoryId.ELECTRONICS: "Electronics & Gadgets",
    CategoryId.BABY: "Baby Care Products",
    CategoryId.HOME: "Home & Living Products",
    CategoryId.PET: "Pet Care Products",
})

# Sentiment word lists: substring tests, each word counted once
MENTION_SENTIMENT_WORDS = MappingProxyType({
    "positive": (
        "best", "top", "recommend", "excellent", "great", "popular", "trusted",
        "leading", "favorite", "outstanding", "highly rated",
    ),
    "negative": (
        "worst", "avoid", "poor", "disappointing", "overpriced", "complaints",
        "issues", "problems", "controversial",
    ),
})

COMPETITOR_SENTIMENT_WORDS = MappingProxyType({
    "positive": (
        "best", "top", "recommend", "excellent", "great", "popular", "trusted",
        "leading", "favorite", "highly rated", "premium",
    ),
    "negative": (
        "worst", "avoid", "poor", "disappointing", "overpriced", "complaints",
        "issues", "problems",
    ),
})

SCORE_WEIGHTS = MappingProxyType({
    "mention_frequency": 0.4,
    "sentiment_quality": 0.2,
    "platform_coverage": 0.2,
    "position_strength": 0.2,
})

PLATFORMS = (Platform.CHATGPT, Platform.PERPLEXITY, Platform.GOOGLE_AI)
PLATFORM_LABELS = MappingProxyType({
    Platform.CHATGPT: "ChatGPT",
    Platform.PERPLEXITY: "Perplexity",
    Platform.GOOGLE_AI: "Google AI",
})

# Coverage always divides by every known surface, not by the platforms queried
PLATFORM_COUNT = 3

MAX_COMPETITORS = 5
MAX_RECOMMENDATIONS = 5
QUERIES_PER_CATEGORY = 15

MENTION_SNIPPET_RADIUS = 50
MENTION_SENTIMENT_RADIUS = 100
COMPETITOR_SENTIMENT_RADIUS = 80
