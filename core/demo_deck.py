"""Built-in demo deck used when no saved state exists."""

from .models import Card
from .utils import new_card_id

# (image url, name, grade, price, aliases)
DEMO_CARDS = [
    ('https://images.pokemontcg.io/swsh45/sv107_hires.png', 'リザードン VMAX', '10', 58000,
     ['リザバナ', 'charizard']),
    ('https://images.pokemontcg.io/base1/4_hires.png', 'ピカチュウ プロモ', '10', 32000,
     ['pikachu', 'プロモ']),
    ('https://images.pokemontcg.io/base1/2_hires.png', 'フシギバナ', '10', 42000,
     ['venusaur', 'バナ']),
]


def get_demo_cards() -> list[Card]:
    """Build the demo deck with fresh card ids."""
    return [
        Card(id=new_card_id(), img=img, name=name, grade=grade, price=float(price),
             aliases=tuple(aliases))
        for img, name, grade, price, aliases in DEMO_CARDS
    ]
