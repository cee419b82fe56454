"""Display labels and number formatting for the terminal views."""

from __future__ import annotations

TYPE_LABELS: dict[str, str] = {
    "normal": "Normal",
    "fire": "Fogo",
    "water": "Água",
    "electric": "Elétrico",
    "grass": "Planta",
    "ice": "Gelo",
    "fighting": "Lutador",
    "poison": "Veneno",
    "ground": "Terra",
    "flying": "Voador",
    "psychic": "Psíquico",
    "bug": "Inseto",
    "rock": "Pedra",
    "ghost": "Fantasma",
    "dragon": "Dragão",
    "dark": "Sombrio",
    "steel": "Aço",
    "fairy": "Fada",
}

STAT_LABELS: dict[str, str] = {
    "hp": "HP",
    "attack": "Ataque",
    "defense": "Defesa",
    "special-attack": "Ataque Esp.",
    "special-defense": "Defesa Esp.",
    "speed": "Velocidade",
}

ALL_SEGMENTS_LABEL = "TODAS"
ALL_CATEGORIES_LABEL = "TODOS"


def type_label(name: str, short: bool = False) -> str:
    label = TYPE_LABELS.get(name, name)
    return label[:3] if short else label


def stat_label(name: str) -> str:
    return STAT_LABELS.get(name, name)


def format_number(record_id: int) -> str:
    return f"#{record_id:04d}"


def display_name(name: str) -> str:
    return name[:1].upper() + name[1:]


def stat_bar_percent(base_stat: int) -> float:
    """Bar fill in percent; base stats are drawn on a 0-200 scale."""
    return min(base_stat / 2, 100)


def decimetres_to_metres(value: int | None) -> float | None:
    return None if value is None else value / 10


def hectograms_to_kilograms(value: int | None) -> float | None:
    return None if value is None else value / 10


def ability_label(name: str, is_hidden: bool) -> str:
    label = name.replace("-", " ")
    return f"{label} (Oculta)" if is_hidden else label


__all__ = [
    "ALL_CATEGORIES_LABEL",
    "ALL_SEGMENTS_LABEL",
    "STAT_LABELS",
    "TYPE_LABELS",
    "ability_label",
    "decimetres_to_metres",
    "display_name",
    "format_number",
    "hectograms_to_kilograms",
    "stat_bar_percent",
    "stat_label",
    "type_label",
]
