import asyncio

from logctx import Attr, get_logger, scope

# Configure with e.g. LOGCTX_LOGGER="text?output=stdout&level=debug-5"
log = get_logger()


async def handle(request_id: str, user: str):
    with scope("request_id", request_id):
        log.info("request started")
        with scope("user", user):
            await asyncio.sleep(0.01)
            log.warn("slow lookup", "ms", 830)
        log.info("request finished")


async def main():
    with scope(Attr("hello", "world")):
        for level in range(-9, 14):
            log.log(level, f"level {level}", "i", level)
    await asyncio.gather(handle("r-1", "alice"), handle("r-2", "bob"))


if __name__ == "__main__":
    asyncio.run(main())
