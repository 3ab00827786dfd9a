"""Built-in grade-level word banks."""

from .interfaces import WordBankSource

# Word -> kid-friendly clue, by grade
WORD_BANKS = {
    1: {
        'cat': 'a small furry pet that says meow',
        'dog': 'a pet that barks and wags its tail',
        'sun': 'the bright star that lights up the day',
        'hat': 'something you wear on your head',
        'red': 'the color of a ripe strawberry',
        'big': 'very large, not small',
        'run': 'to move fast on your feet',
        'bed': 'where you sleep at night',
        'cup': 'you drink milk or juice from it',
        'fish': 'an animal that swims in water',
        'frog': 'a green animal that hops and says ribbit',
        'milk': 'a white drink that comes from cows',
        'tree': 'a tall plant with a trunk and leaves',
        'book': 'pages with words and pictures to read',
        'jump': 'to push off the ground with your feet',
        'ball': 'a round toy you can throw or kick',
        'cake': 'a sweet treat for birthdays',
        'duck': 'a bird that swims and says quack',
        'moon': 'it shines in the sky at night',
        'star': 'a tiny light twinkling in the night sky',
        'rain': 'water falling from the clouds',
        'play': 'to have fun with toys or friends',
        'green': 'the color of grass',
        'happy': 'feeling glad and smiling',
    },
    2: {
        'apple': 'a crunchy red or green fruit',
        'bread': 'food baked from flour, used for sandwiches',
        'castle': 'a big stone home for a king or queen',
        'dragon': 'a make-believe creature that breathes fire',
        'friend': 'someone you like to play with',
        'garden': 'a place where flowers and vegetables grow',
        'jungle': 'a thick forest full of wild animals',
        'kitten': 'a baby cat',
        'ladder': 'you climb its steps to reach high places',
        'monkey': 'an animal that loves to climb and eat bananas',
        'pencil': 'you write and draw with it',
        'planet': 'a big round world that circles the sun',
        'rabbit': 'a furry animal with long ears that hops',
        'school': 'the place where you go to learn',
        'spring': 'the season when flowers start to bloom',
        'summer': 'the warm season with no school',
        'turtle': 'a slow animal that carries its shell',
        'winter': 'the cold season when it may snow',
        'window': 'glass in a wall that you can see through',
        'yellow': 'the color of a banana',
        'knight': 'a brave soldier who rides a horse',
        'crown': 'a golden hat that a king wears',
        'shield': 'a knight holds it for protection',
        'honest': 'always telling the truth',
    },
}


def get_all_grades() -> list[int]:
    """Return all built-in grades."""
    return sorted(WORD_BANKS)


def get_word_bank(grade: int) -> dict[str, str] | None:
    """Return a copy of a grade's word bank, or None if the grade is unknown."""
    bank = WORD_BANKS.get(grade)
    return dict(bank) if bank is not None else None


class StaticWordBankSource(WordBankSource):
    """Serves the built-in word banks."""

    def list_grades(self) -> list[int]:
        return get_all_grades()

    def get_bank(self, grade: int) -> dict[str, str] | None:
        return get_word_bank(grade)
