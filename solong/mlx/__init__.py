"""Sprite layer for the game: textures, depth-sorted image instances and a pygame window."""