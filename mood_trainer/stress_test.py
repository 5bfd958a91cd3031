import asyncio
import httpx
import random

API_URL = "http://127.0.0.1:3000"
TOTAL_USERS = 1000
MAX_CONCURRENCY = 50  # how many requests at once
TRAIN_EVERY = 200

semaphore = asyncio.Semaphore(MAX_CONCURRENCY)


async def user_sim(client: httpx.AsyncClient, user_id: int, movies):
    async with semaphore:
        try:
            preferred, not_preferred = random.sample(movies, 2)
            fb_resp = await client.post(f"{API_URL}/add-feedback", json={
                "preferredText": preferred,
                "notPreferredText": not_preferred,
            })
            fb_resp.raise_for_status()

            if user_id and user_id % TRAIN_EVERY == 0:
                train_resp = await client.post(f"{API_URL}/train")
                train_resp.raise_for_status()

        except httpx.HTTPError as e:
            print(f"[User {user_id}] HTTP error: {e}")


async def main():
    async with httpx.AsyncClient(timeout=60) as client:
        resp = await client.get(f"{API_URL}/test")
        resp.raise_for_status()
        movies = resp.json()
        if len(movies) < 2:
            print("Need at least two movies loaded to submit feedback.")
            return

        tasks = [user_sim(client, i, movies) for i in range(TOTAL_USERS)]
        await asyncio.gather(*tasks)

if __name__ == "__main__":
    asyncio.run(main())
