import asyncio
import httpx
import random

API = "http://127.0.0.1:3000"
NUM_USERS = 20
CHOICES_PER_USER = 10


def taste(movie, user_id):
    # each simulated user leans towards either calm/positive or intense movies
    if user_id % 2:
        return movie["sentiment"] + movie["valence"]
    return movie["arousal"] + movie["dominance"]


async def user_sim(client, user_id, movies):
    for _ in range(CHOICES_PER_USER):
        a, b = random.sample(movies, 2)
        preferred, not_preferred = (a, b) if taste(a, user_id) >= taste(b, user_id) else (b, a)
        await client.post(f"{API}/add-feedback", json={
            "preferredText": preferred,
            "notPreferredText": not_preferred,
        })
        await asyncio.sleep(random.uniform(0.05, 0.2))


async def main():
    async with httpx.AsyncClient(timeout=120.0) as client:
        r = await client.get(f"{API}/test")
        movies = r.json()
        if len(movies) < 2:
            print("Not enough movies to compare")
            return

        tasks = [asyncio.create_task(user_sim(client, uid, movies)) for uid in range(NUM_USERS)]
        await asyncio.gather(*tasks)

        r = await client.post(f"{API}/train")
        for layer in r.json():
            print(layer["layer"], layer["weights"], layer["biases"])

if __name__ == "__main__":
    asyncio.run(main())
