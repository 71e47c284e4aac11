import asyncio

import bcrypt


async def hash_password(password: str) -> str:
    """bcrypt with cost factor 12, off the event loop"""
    hashed = await asyncio.to_thread(bcrypt.hashpw, password.encode(), bcrypt.gensalt(12))
    return hashed.decode()
