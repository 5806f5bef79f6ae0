"""
Starter opening book used to seed an empty repertoire.

Entries use the REST payload layout (camelCase keys). Variation startMove is
1-based: the variation replaces the main line from that move onwards.
"""

STARTER_OPENINGS = [
    # ============ OPEN GAMES ============
    {
        'name': 'Ruy Lopez',
        'description': 'Spanish Game: White pressures the knight defending e5',
        'category': 'Open Games',
        'moves': ['e4', 'e5', 'Nf3', 'Nc6', 'Bb5', 'a6', 'Ba4', 'Nf6'],
        'variations': [
            {'name': 'Petrov Defense', 'startMove': 4, 'moves': ['Nf6', 'Nxe5', 'd6'],
             'description': 'Black counterattacks e4 instead of defending e5'},
            {'name': 'Berlin Defense', 'startMove': 6, 'moves': ['Nf6', 'O-O', 'Nxe4']},
        ],
    },
    {
        'name': 'Italian Game',
        'description': 'Quick development aimed at the f7 square',
        'category': 'Open Games',
        'moves': ['e4', 'e5', 'Nf3', 'Nc6', 'Bc4', 'Bc5', 'c3', 'Nf6', 'd4'],
        'variations': [
            {'name': 'Two Knights Defense', 'startMove': 6, 'moves': ['Nf6', 'Ng5', 'd5', 'exd5']},
        ],
    },

    # ============ SEMI-OPEN GAMES ============
    {
        'name': 'Sicilian Defense',
        'description': 'The most popular chess opening',
        'category': 'Semi-Open Games',
        'moves': ['e4', 'c5', 'Nf3', 'd6', 'd4', 'cxd4', 'Nxd4', 'Nf6', 'Nc3', 'a6'],
        'variations': [
            {'name': 'French Defense', 'startMove': 2, 'moves': ['e6', 'd4', 'd5']},
            {'name': 'Dragon Variation', 'startMove': 10, 'moves': ['g6', 'Be3', 'Bg7', 'f3', 'O-O']},
        ],
    },
    {
        'name': 'Caro-Kann Defense',
        'description': 'Solid defense preparing ...d5 with pawn support',
        'category': 'Semi-Open Games',
        'moves': ['e4', 'c6', 'd4', 'd5', 'Nc3', 'dxe4', 'Nxe4', 'Bf5'],
        'variations': [
            {'name': 'Advance Variation', 'startMove': 5, 'moves': ['e5', 'Bf5']},
        ],
    },

    # ============ CLOSED GAMES ============
    {
        'name': "Queen's Gambit",
        'description': 'Classical opening for white',
        'category': 'Closed Games',
        'moves': ['d4', 'd5', 'c4', 'e6', 'Nc3', 'Nf6'],
        'variations': [
            {'name': "Queen's Gambit Accepted", 'startMove': 4, 'moves': ['dxc4', 'Nf3', 'Nf6', 'e3']},
            {'name': 'Slav Defense', 'startMove': 4, 'moves': ['c6', 'Nf3', 'Nf6']},
        ],
    },
    {
        'name': 'London System',
        'description': 'A reliable setup with an early Bf4',
        'category': 'Closed Games',
        'moves': ['d4', 'd5', 'Bf4', 'Nf6', 'e3', 'e6', 'Nf3', 'c5', 'c3', 'Nc6'],
        'variations': [],
    },

    # ============ INDIAN DEFENSES ============
    {
        'name': "King's Indian Defense",
        'description': 'Dynamic counterattacking setup',
        'category': 'Indian Defenses',
        'moves': ['d4', 'Nf6', 'c4', 'g6', 'Nc3', 'Bg7', 'e4', 'd6'],
        'variations': [
            {'name': 'Grunfeld Defense', 'startMove': 6,
             'moves': ['d5', 'cxd5', 'Nxd5', 'e4', 'Nxc3', 'bxc3']},
        ],
    },

    # ============ FLANK OPENINGS ============
    {
        'name': 'English Opening',
        'description': 'White claims d5 from the flank',
        'category': 'Flank Openings',
        'moves': ['c4', 'e5', 'Nc3', 'Nf6', 'g3', 'd5', 'cxd5', 'Nxd5', 'Bg2'],
        'variations': [],
    },
]
