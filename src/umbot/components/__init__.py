from .button import Button, Buttons
from .card import Card
from .image import Image
from .navigation import Navigation
from .nlu import Nlu
from .sound import Sound

__all__ = [
    'Button',
    'Buttons',
    'Card',
    'Image',
    'Navigation',
    'Nlu',
    'Sound',
]
