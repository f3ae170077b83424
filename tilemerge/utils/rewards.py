"""Reward tiers granted at the end of a session, based on the highest tile reached."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RewardTier:
    """
    Rewards handed to the character progression once a session ends.

    Attributes
    ----------
    name : str
        Display name of the tier.
    threshold : int
        Lowest highest-tile value granting this tier.
    gold : int
        Gold awarded.
    consumable_name : str
        Consumable awarded alongside the gold.
    consumable_count : int
        How many consumables are awarded, possibly zero.
    wisdom_bonus : int
        Bonus added to the wisdom stat.
    """

    name: str
    threshold: int
    gold: int
    consumable_name: str
    consumable_count: int
    wisdom_bonus: int

    @property
    def loot(self) -> str:
        if self.consumable_count == 0:
            return '—'
        return f'{self.consumable_count}× {self.consumable_name}'


# ##>: Ordered from the highest threshold to the lowest.
REWARD_TIERS: tuple[RewardTier, ...] = (
    RewardTier('Legendary Mind', 2048, gold=250, consumable_name='Ancient Tome', consumable_count=3, wisdom_bonus=3),
    RewardTier('Strategic Genius', 1024, gold=175, consumable_name='Focus Scroll', consumable_count=2, wisdom_bonus=2),
    RewardTier('Sharp Planner', 512, gold=100, consumable_name='Green Tea', consumable_count=1, wisdom_bonus=1),
    RewardTier('Good Effort', 0, gold=50, consumable_name='Apple Juice', consumable_count=0, wisdom_bonus=1),
)


def reward_tier(highest_tile: int) -> RewardTier:
    """
    Look up the reward tier for the highest tile reached.

    Parameters
    ----------
    highest_tile : int
        Highest tile value reached during the session.

    Returns
    -------
    RewardTier
        The first tier whose threshold is reached.
    """
    for tier in REWARD_TIERS:
        if highest_tile >= tier.threshold:
            return tier
    return REWARD_TIERS[-1]
