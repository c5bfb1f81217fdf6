"""
Extension identity protocol.

Several extensions can be loaded into one profile and their
``chrome-extension://<id>`` addresses are not stable, so the extension to
command is found by asking every background context who it is:

    {"action": "identify"}     -> {"identity": "tab-duplicator"}
    {"action": "duplicateTab"} -> {"success": true, "newTabId": 7}

Messages are delivered by evaluating ``CHANNEL_SCRIPT`` inside the
extension's service worker (or MV2 background page).
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

from .errors import ExtensionNotFoundError, ExtensionProtocolError
from .logger import DebugLog

logger = logging.getLogger(__name__)

EXTENSION_SCHEME = "chrome-extension://"
CHANNEL_ERROR_KEY = "__channelError"

CHANNEL_SCRIPT = """
async (message) => {
    try {
        if (typeof self.handleMessage === 'function') {
            return await self.handleMessage(message);
        }
        return await new Promise((resolve) => {
            chrome.runtime.sendMessage(message, (reply) => {
                if (chrome.runtime.lastError) {
                    resolve({__channelError: chrome.runtime.lastError.message || String(chrome.runtime.lastError)});
                } else {
                    resolve(reply === undefined ? null : reply);
                }
            });
        });
    } catch (err) {
        return {__channelError: (err && err.message) ? err.message : String(err)};
    }
}
"""


def is_extension_worker(worker: Any) -> bool:
    url = getattr(worker, "url", "") or ""
    return url.startswith(EXTENSION_SCHEME)


def list_candidate_workers(context: Any) -> List[Any]:
    """Extension service workers (MV3) followed by background pages (MV2)."""
    candidates: List[Any] = []
    for attr in ("service_workers", "background_pages"):
        try:
            candidates.extend(getattr(context, attr, None) or [])
        except Exception as e:
            logger.debug(f"Unable to list {attr}: {e}")
    return [w for w in candidates if is_extension_worker(w)]


async def _post(worker: Any, message: Dict[str, Any], timeout: float) -> Any:
    return await asyncio.wait_for(worker.evaluate(CHANNEL_SCRIPT, message), timeout=timeout)


async def identify(worker: Any, timeout: float = 1.0) -> Optional[Dict[str, Any]]:
    """Ask a worker who it is; ``None`` on timeout, channel error or no identity."""
    url = getattr(worker, "url", "?")
    try:
        reply = await _post(worker, {"action": "identify"}, timeout)
    except asyncio.TimeoutError:
        logger.debug(f"identify timed out after {timeout}s for {url}")
        return None
    except Exception as e:
        logger.debug(f"identify failed for {url}: {e}")
        return None
    if not isinstance(reply, dict) or CHANNEL_ERROR_KEY in reply:
        return None
    if not isinstance(reply.get("identity"), str):
        return None
    return {"identity": reply["identity"]}


async def find_worker(
    workers: Iterable[Any],
    wanted_identity: str,
    timeout: float = 1.0,
    log: Optional[DebugLog] = None,
) -> Any:
    log = log or DebugLog()
    checked: List[str] = []
    for worker in workers:
        if not is_extension_worker(worker):
            continue
        url = getattr(worker, "url", "?")
        checked.append(url)
        reply = await identify(worker, timeout=timeout)
        log.debug("[EXTENSION] %s identified as %s", url, reply.get("identity") if reply else None)
        if reply and reply["identity"] == wanted_identity:
            return worker
    raise ExtensionNotFoundError(
        f"Extension '{wanted_identity}' not found among {len(checked)} candidate worker(s): "
        + (", ".join(checked) if checked else "none")
    )


async def send_command(
    worker: Any,
    action: str,
    payload: Optional[Dict[str, Any]] = None,
    timeout: float = 5.0,
) -> Dict[str, Any]:
    message: Dict[str, Any] = dict(payload or {})
    message["action"] = action
    url = getattr(worker, "url", "?")
    try:
        reply = await _post(worker, message, timeout)
    except asyncio.TimeoutError:
        raise ExtensionProtocolError(f"No reply from extension {url} to '{action}' within {timeout}s")
    except Exception as e:
        raise ExtensionProtocolError(f"Channel error sending '{action}' to {url}: {e}") from e

    if reply is None:
        raise ExtensionProtocolError(f"No reply from extension {url} to '{action}'")
    if not isinstance(reply, dict):
        raise ExtensionProtocolError(f"Unexpected reply from extension {url} to '{action}': {reply!r}")
    if CHANNEL_ERROR_KEY in reply:
        raise ExtensionProtocolError(f"Channel error sending '{action}' to {url}: {reply[CHANNEL_ERROR_KEY]}")
    if reply.get("success") is False:
        detail = reply.get("error") or "no error detail"
        raise ExtensionProtocolError(f"Extension {url} failed '{action}': {detail}")
    return reply


async def duplicate_current_tab(
    context: Any,
    identity: str,
    identify_timeout: float = 1.0,
    command_timeout: float = 5.0,
    log: Optional[DebugLog] = None,
) -> Dict[str, Any]:
    log = log or DebugLog()
    workers = list_candidate_workers(context)
    log.debug("[EXTENSION] Looking for '%s' among %d worker(s)", identity, len(workers))
    worker = await find_worker(workers, identity, timeout=identify_timeout, log=log)
    reply = await send_command(worker, "duplicateTab", timeout=command_timeout)
    log.debug("[EXTENSION] Duplicated tab, new tab id: %s", reply.get("newTabId"))
    return reply
