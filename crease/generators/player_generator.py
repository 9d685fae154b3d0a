import random
from faker import Faker
from crease.models.player import Player, PlayerRole

# Use en_US as fallback for unavailable locales
fake_in = Faker('en_IN')
fake_au = Faker('en_AU')
fake_en = Faker('en_GB')
fake_za = Faker('en_US')  # en_ZA not available
fake_nz = Faker('en_NZ')


class PlayerGenerator:
    """Generates fictional cricketers with career figures that fit their slot in the order"""

    NATIONALITIES = [
        ("India", fake_in, 40),
        ("Australia", fake_au, 20),
        ("England", fake_en, 20),
        ("South Africa", fake_za, 10),
        ("New Zealand", fake_nz, 10),
    ]

    # Role for each batting position in a balanced XI
    XI_ROLES = [
        PlayerRole.BATSMAN,
        PlayerRole.BATSMAN,
        PlayerRole.BATSMAN,
        PlayerRole.BATSMAN,
        PlayerRole.BATSMAN,
        PlayerRole.ALL_ROUNDER,
        PlayerRole.WICKET_KEEPER,
        PlayerRole.ALL_ROUNDER,
        PlayerRole.BOWLER,
        PlayerRole.BOWLER,
        PlayerRole.BOWLER,
    ]

    # (bat_avg, bat_sr, bowl_avg, bowl_sr) centre points by role
    ROLE_FIGURES = {
        PlayerRole.BATSMAN: (42.0, 55.0, 60.0, 110.0),
        PlayerRole.WICKET_KEEPER: (32.0, 58.0, 80.0, 150.0),
        PlayerRole.ALL_ROUNDER: (30.0, 60.0, 34.0, 68.0),
        PlayerRole.BOWLER: (12.0, 45.0, 27.0, 55.0),
    }

    @staticmethod
    def _weighted_choice(choices: list[tuple]):
        """Select from weighted choices [(item, ..., weight), ...]"""
        weights = [c[-1] for c in choices]
        return random.choices(choices, weights=weights, k=1)[0]

    @staticmethod
    def _vary(base: float, spread: float = 0.2, minimum: float = 1.0) -> float:
        """Jitter a figure by up to +/- spread (as a fraction), rounded to 1dp"""
        value = base * (1 + random.uniform(-spread, spread))
        return round(max(minimum, value), 1)

    @classmethod
    def generate_player(cls, role: PlayerRole, batting_position: int) -> Player:
        nationality, fake, _ = cls._weighted_choice(cls.NATIONALITIES)
        bat_avg, bat_sr, bowl_avg, bowl_sr = cls.ROLE_FIGURES[role]
        return Player(
            name=fake.name_male(),
            age=random.randint(19, 36),
            nationality=nationality,
            role=role,
            batting_position=batting_position,
            bat_avg=cls._vary(bat_avg),
            bat_sr=cls._vary(bat_sr),
            bowl_avg=cls._vary(bowl_avg),
            bowl_sr=cls._vary(bowl_sr),
        )

    @classmethod
    def generate_xi(cls) -> list[Player]:
        """Generate a full XI in batting order"""
        return [
            cls.generate_player(role, position)
            for position, role in enumerate(cls.XI_ROLES, start=1)
        ]
