from __future__ import annotations

from getpass import getpass

from .pipeline import Direction


def ask_direction() -> Direction:
    while True:
        answer = input("Do you want to encrypt or decrypt a file? [encrypt/decrypt]: ")
        answer = answer.strip().lower()
        for direction in Direction:
            if answer and direction.value.startswith(answer):
                return direction
        print("Please answer 'encrypt' or 'decrypt'.")


def ask_password(direction: Direction) -> str:
    return getpass(f"Enter the password to {Direction(direction).value} the file: ")
