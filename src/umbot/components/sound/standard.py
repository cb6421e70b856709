"""Стандартные звуки Алисы и Маруси."""

# ключ -> имена звуков без префикса платформы
STANDARD_SOUND_NAMES: dict[str, tuple[str, ...]] = {
    "#game_win#": (
        "game-win-1",
        "game-win-2",
        "game-win-3",
    ),
    "#game_loss#": (
        "game-loss-1",
        "game-loss-2",
        "game-loss-3",
    ),
    "#game_boot#": (
        "game-boot-1",
    ),
    "#game_coin#": (
        "game-8-bit-coin-1",
        "game-8-bit-coin-2",
    ),
    "#game_ping#": (
        "game-ping-1",
    ),
    "#game_fly#": (
        "game-8-bit-flyby-1",
    ),
    "#game_gun#": (
        "game-8-bit-machine-gun-1",
    ),
    "#game_phone#": (
        "game-8-bit-phone-1",
    ),
    "#game_powerup#": (
        "game-powerup-1",
        "game-powerup-2",
    ),
    "#nature_wind#": (
        "nature-wind-1",
        "nature-wind-2",
    ),
    "#nature_thunder#": (
        "nature-thunder-1",
        "nature-thunder-2",
    ),
    "#nature_jungle#": (
        "nature-jungle-1",
        "nature-jungle-2",
    ),
    "#nature_rain#": (
        "nature-rain-1",
        "nature-rain-2",
    ),
    "#nature_forest#": (
        "nature-forest-1",
        "nature-forest-2",
    ),
    "#nature_sea#": (
        "nature-sea-1",
        "nature-sea-2",
    ),
    "#nature_fire#": (
        "nature-fire-1",
        "nature-fire-2",
    ),
    "#nature_stream#": (
        "nature-stream-1",
        "nature-stream-2",
    ),
    "#thing_chainsaw#": (
        "things-chainsaw-1",
        "things-explosion-1",
        "things-water-3",
        "things-water-1",
        "things-water-2",
        "things-switch-1",
        "things-switch-2",
        "things-gun-1",
        "transport-ship-horn-1",
        "transport-ship-horn-2",
        "things-door-1",
        "things-door-2",
        "things-glass-2",
        "things-bell-1",
        "things-bell-2",
        "things-car-1",
        "things-car-2",
        "things-sword-2",
        "things-sword-1",
        "things-sword-3",
        "things-siren-1",
        "things-siren-2",
        "things-old-phone-1",
        "things-old-phone-2",
        "things-glass-1",
        "things-construction-2",
        "things-construction-1",
        "things-phone-1",
        "things-phone-2",
        "things-phone-3",
        "things-phone-4",
        "things-phone-5",
        "things-toilet-1",
        "things-cuckoo-clock-2",
        "things-cuckoo-clock-1",
    ),
    "#animals_all#": (
        "animals-wolf-1",
        "animals-crow-1",
        "animals-crow-2",
        "animals-cow-1",
        "animals-cow-2",
        "animals-cow-3",
        "animals-cat-1",
        "animals-cat-2",
        "animals-cat-3",
        "animals-cat-4",
        "animals-cat-5",
        "animals-cuckoo-1",
        "animals-chicken-1",
        "animals-lion-1",
        "animals-lion-2",
        "animals-horse-1",
        "animals-horse-2",
        "animals-horse-galloping-1",
        "animals-horse-walking-1",
        "animals-frog-1",
        "animals-seagull-1",
        "animals-monkey-1",
        "animals-sheep-1",
        "animals-sheep-2",
        "animals-rooster-1",
        "animals-elephant-1",
        "animals-elephant-2",
        "animals-dog-1",
        "animals-dog-2",
        "animals-dog-3",
        "animals-dog-4",
        "animals-dog-5",
        "animals-owl-1",
        "animals-owl-2",
    ),
    "#human_all#": (
        "human-cheer-1",
        "human-cheer-2",
        "human-kids-1",
        "human-walking-dead-1",
        "human-walking-dead-2",
        "human-walking-dead-3",
        "human-cough-1",
        "human-cough-2",
        "human-laugh-1",
        "human-laugh-2",
        "human-laugh-3",
        "human-laugh-4",
        "human-laugh-5",
        "human-crowd-1",
        "human-crowd-2",
        "human-crowd-3",
        "human-crowd-4",
        "human-crowd-5",
        "human-crowd-7",
        "human-crowd-6",
        "human-sneeze-1",
        "human-sneeze-2",
        "human-walking-room-1",
        "human-walking-snow-1",
    ),
    "#music_all#": (
        "music-harp-1",
        "music-drums-1",
        "music-drums-2",
        "music-drums-3",
        "music-drum-loop-1",
        "music-drum-loop-2",
        "music-tambourine-80bpm-1",
        "music-tambourine-100bpm-1",
        "music-tambourine-120bpm-1",
        "music-bagpipes-1",
        "music-bagpipes-2",
        "music-guitar-c-1",
        "music-guitar-e-1",
        "music-guitar-g-1",
        "music-guitar-a-1",
        "music-gong-1",
        "music-gong-2",
        "music-horn-2",
        "music-violin-c-1",
        "music-violin-c-2",
        "music-violin-a-1",
        "music-violin-e-1",
        "music-violin-d-1",
        "music-violin-b-1",
        "music-violin-g-1",
        "music-violin-f-1",
        "music-horn-1",
        "music-piano-c-1",
        "music-piano-c-2",
        "music-piano-a-1",
        "music-piano-e-1",
        "music-piano-d-1",
        "music-piano-b-1",
        "music-piano-g-1",
    ),
}

S_EFFECT_BEHIND_THE_WALL = '<speaker effect="behind_the_wall">'
S_EFFECT_HAMSTER = '<speaker effect="hamster">'
S_EFFECT_MEGAPHONE = '<speaker effect="megaphone">'
S_EFFECT_PITCH_DOWN = '<speaker effect="pitch_down">'
S_EFFECT_PSYCHODELIC = '<speaker effect="psychodelic">'
S_EFFECT_PULSE = '<speaker effect="pulse">'
S_EFFECT_TRAIN_ANNOUNCE = '<speaker effect="train_announce">'
S_EFFECT_END = '<speaker effect="-">'


def _alisa_audio(name: str) -> str:
    if name.startswith("music-"):
        return f'<speaker audio="alice-{name}.opus">'
    return f'<speaker audio="alice-sounds-{name}.opus">'


ALISA_STANDARD_SOUNDS: list[dict] = [
    {"key": key, "sounds": [_alisa_audio(name) for name in names]}
    for key, names in STANDARD_SOUND_NAMES.items()
]

MARUSIA_STANDARD_SOUNDS: list[dict] = [
    {"key": key, "sounds": [f'<speaker audio="marusia-sounds/{name}">' for name in names]}
    for key, names in STANDARD_SOUND_NAMES.items()
    if key != "#music_all#"
]
