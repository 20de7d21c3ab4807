"""
Prompt Store for category query templates.

This module holds the fixed set of buyer-style questions sent to every AI
platform during an audit. Each category has QUERIES_PER_CATEGORY prompts
mixing category lists, recommendation requests and head-to-head
comparisons.
"""

from typing import Dict, List, Optional

from config.constants import CATEGORY_LABELS, QUERIES_PER_CATEGORY
from models.schemas import CategoryId


class PromptStore:
    """
    In-memory storage for category prompt templates.

    Templates are loaded once at construction and never change afterwards.
    """

    def __init__(self):
        """Initialize and load the prompt templates."""
        self.prompt_templates: Dict[CategoryId, List[str]] = {}
        self.initialize_templates()

    def get_prompts(self, category: str, limit: Optional[int] = None) -> List[str]:
        """
        Retrieve the prompts for a category.

        Args:
            category: Category id (e.g., 'beauty', 'pet')
            limit: Maximum number of prompts (default: QUERIES_PER_CATEGORY)

        Returns:
            List of prompt strings, empty list if category not found
        """
        prompts = self.prompt_templates.get(category, [])
        return list(prompts[:limit or QUERIES_PER_CATEGORY])

    def get_category_label(self, category: str) -> str:
        """Display label for a category, the raw id if unknown."""
        return CATEGORY_LABELS.get(category, str(getattr(category, "value", category)))

    def initialize_templates(self) -> None:
        """
        Load the prompt templates for all supported categories.
        """
        self.prompt_templates = {
            CategoryId.BEAUTY: [
                "What are the best skincare brands in India?",
                "Best face wash for oily skin in India",
                "Which sunscreen brand should I buy in India?",
                "Recommend a good vitamin C serum available in India",
                "Mamaearth vs Minimalist, which is better for skincare?",
                "Top natural and toxin-free beauty brands in India",
                "Best affordable lipstick brands in India",
                "Which Indian skincare brand is best for acne-prone skin?",
                "Compare Plum and Dot & Key moisturizers",
                "Best Ayurvedic skincare brands in India",
                "Top D2C beauty brands in India 2025",
                "Should I buy skincare from Nykaa or directly from brands?",
                "Best hair fall control shampoo brands in India",
                "Most trusted coffee-based body care brands in India",
                "Best budget skincare routine products in India",
            ],
            CategoryId.FOOD: [
                "What are the best healthy snack brands in India?",
                "Best online meat delivery services in India",
                "Which tea brand should I buy online in India?",
                "Recommend a good protein bar brand in India",
                "Licious vs FreshToHome, which is better?",
                "Top organic food brands in India",
                "Best cold-pressed juice brands in India",
                "Which Greek yogurt brand is best in India?",
                "Compare Yogabar and True Elements muesli",
                "Best specialty coffee brands in India",
                "Top D2C food brands in India 2025",
                "Should I buy milk from Country Delight?",
                "Best healthy breakfast cereal brands in India",
                "Best baby food and millet snack brands in India",
                "Most popular plant-based food brands in India",
            ],
            CategoryId.HEALTH: [
                "What are the best supplement brands in India?",
                "Best whey protein brands in India",
                "Which multivitamin should I take in India?",
                "Recommend a good Ayurvedic wellness brand",
                "HealthKart vs MuscleBlaze, which is better?",
                "Top plant-based protein brands in India",
                "Best collagen supplement brands in India",
                "Which apple cider vinegar brand is best in India?",
                "Compare OZiva and Wellbeing Nutrition",
                "Best women's health supplement brands in India",
                "Top D2C wellness brands in India 2025",
                "Should I buy effervescent vitamin tablets?",
                "Best fitness equipment brands in India",
                "Best electrolyte and hydration drink brands in India",
                "Most trusted nutrition brands in India",
            ],
            CategoryId.FASHION: [
                "What are the best casual clothing brands in India?",
                "Best online t-shirt brands for men in India",
                "Which brand should I buy jeans from in India?",
                "Recommend a good streetwear brand in India",
                "Bewakoof vs The Souled Store, which is better?",
                "Top affordable fashion brands for women in India",
                "Best premium menswear brands in India",
                "Which Indian brand has the best innerwear for men?",
                "Compare Snitch and Rare Rabbit shirts",
                "Best sustainable clothing brands in India",
                "Top D2C fashion brands in India 2025",
                "Should I buy clothes from Urbanic?",
                "Best oversized t-shirt brands in India",
                "Best pop culture merchandise brands in India",
                "Most popular Gen Z fashion brands in India",
            ],
            CategoryId.ELECTRONICS: [
                "What are the best earbuds brands in India?",
                "Best smartwatch under 5000 in India",
                "Which power bank should I buy in India?",
                "Recommend a good budget Bluetooth speaker in India",
                "boAt vs Noise, which is better?",
                "Top Indian audio brands",
                "Best neckband earphones in India",
                "Which fitness band is best for Indian users?",
                "Compare Fire-Boltt and Noise smartwatches",
                "Best gaming headphones brands in India",
                "Top D2C electronics brands in India 2025",
                "Should I buy boAt or OnePlus earbuds?",
                "Best charging accessories brands in India",
                "Best soundbar brands for home in India",
                "Most reliable budget gadget brands in India",
            ],
            CategoryId.BABY: [
                "What are the best baby care brands in India?",
                "Best baby lotion for newborns in India",
                "Which diaper brand should I buy in India?",
                "Recommend a safe baby shampoo brand in India",
                "FirstCry vs Mothercare, which is better?",
                "Top natural baby products brands in India",
                "Best baby massage oil brands in India",
                "Which baby wipes brand is best in India?",
                "Compare Himalaya Baby and Johnsons Baby products",
                "Best toxin-free baby care brands in India",
                "Top D2C baby brands in India 2025",
                "Should I buy baby products online in India?",
                "Best baby feeding bottle brands in India",
                "Best stretch mark cream brands for new moms in India",
                "Most trusted kids clothing brands in India",
            ],
            CategoryId.HOME: [
                "What are the best mattress brands in India?",
                "Best memory foam mattress in India",
                "Which mattress should I buy for back pain in India?",
                "Recommend a good online furniture store in India",
                "Wakefit vs Sleepyhead, which is better?",
                "Top affordable home decor brands in India",
                "Best orthopedic mattress brands in India",
                "Which pillow brand is best in India?",
                "Compare Pepperfry and Urban Ladder furniture",
                "Best sofa brands in India",
                "Top D2C home brands in India 2025",
                "Should I buy a mattress online in India?",
                "Best bedsheet and home linen brands in India",
                "Best study table and office chair brands in India",
                "Most trusted sleep product brands in India",
            ],
            CategoryId.PET: [
                "What are the best pet food brands in India?",
                "Best dog food for puppies in India",
                "Which cat food should I buy in India?",
                "Recommend a good online pet store in India",
                "Pedigree vs Drools, which is better?",
                "Top natural dog treat brands in India",
                "Best pet grooming product brands in India",
                "Which dog shampoo brand is best in India?",
                "Compare Royal Canin and Drools for large breeds",
                "Best pet supplement brands in India",
                "Top D2C pet brands in India 2025",
                "Should I buy pet food from Supertails?",
                "Best dog harness and leash brands in India",
                "Best cat litter brands in India",
                "Most trusted pet care brands in India",
            ],
        }


# Singleton instance
_prompt_store: Optional[PromptStore] = None


def get_prompt_store() -> PromptStore:
    """
    Get or create the global PromptStore instance.

    Returns:
        PromptStore: The shared prompt store instance
    """
    global _prompt_store
    if _prompt_store is None:
        _prompt_store = PromptStore()
    return _prompt_store
