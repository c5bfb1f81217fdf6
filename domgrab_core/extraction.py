#!/usr/bin/env python3
from typing import Any, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .cleanup import CleanupCoordinator
from .config import Config
from .errors import SelectorNotFoundError, XPathEvaluationError
from .logger import DebugLog

XPATH_FAILURE_PREFIX = "XPath evaluation failed in browser: "

# Returns {kind, value}; kind is "scalar", "nodes", "node" or "unknown".
XPATH_SCRIPT = """
(expression) => {
    const project = (node) => {
        if (!node) return null;
        switch (node.nodeType) {
            case Node.ELEMENT_NODE: return node.outerHTML;
            case Node.ATTRIBUTE_NODE:
            case Node.TEXT_NODE: return node.nodeValue;
            case Node.COMMENT_NODE: return `<!-- ${node.nodeValue} -->`;
            default: return `Unsupported node type: ${node.nodeType}`;
        }
    };
    let result;
    try {
        result = document.evaluate(expression, document, null, XPathResult.ANY_TYPE, null);
    } catch (error) {
        return {kind: "error", value: error && error.message ? error.message : String(error)};
    }
    switch (result.resultType) {
        case XPathResult.NUMBER_TYPE:
            return {kind: "scalar", value: Number.isFinite(result.numberValue) ? result.numberValue : null};
        case XPathResult.STRING_TYPE: return {kind: "scalar", value: result.stringValue};
        case XPathResult.BOOLEAN_TYPE: return {kind: "scalar", value: result.booleanValue};
        case XPathResult.UNORDERED_NODE_ITERATOR_TYPE:
        case XPathResult.ORDERED_NODE_ITERATOR_TYPE: {
            const values = [];
            try {
                let node;
                while ((node = result.iterateNext())) values.push(project(node));
            } catch (error) {
                return {kind: "error", value: error && error.message ? error.message : String(error)};
            }
            return {kind: "nodes", value: values};
        }
        case XPathResult.UNORDERED_NODE_SNAPSHOT_TYPE:
        case XPathResult.ORDERED_NODE_SNAPSHOT_TYPE: {
            const values = [];
            for (let i = 0; i < result.snapshotLength; i++) values.push(project(result.snapshotItem(i)));
            return {kind: "nodes", value: values};
        }
        case XPathResult.ANY_UNORDERED_NODE_TYPE:
        case XPathResult.FIRST_ORDERED_NODE_TYPE:
            return {kind: "node", value: project(result.singleNodeValue)};
        default:
            return {kind: "unknown", value: `Unknown XPathResult type: ${result.resultType}`};
    }
}
"""


async def extract_css(
    page,
    selector: str,
    config: Config,
    log: Optional[DebugLog] = None,
    cleanup: Optional[CleanupCoordinator] = None,
) -> str:
    """outerHTML of the first element matching ``selector``."""
    log = log or DebugLog()
    log.debug("[CSS] Waiting for CSS selector: %s", selector)
    try:
        handle = await page.wait_for_selector(selector, state="attached", timeout=config.selector_timeout_ms)
    except PlaywrightTimeoutError as e:
        raise SelectorNotFoundError(
            f"CSS selector \"{selector}\" not found within {config.selector_timeout_ms} ms"
        ) from e
    if handle is None:
        raise SelectorNotFoundError(f"CSS selector \"{selector}\" not found: wait returned no element")
    if cleanup is None:
        cleanup = CleanupCoordinator(log)
    cleanup.track_handle(handle)
    try:
        log.debug("[CSS] Extracting outerHTML for selector: %s", selector)
        html = await handle.evaluate("el => el.outerHTML")
    finally:
        await cleanup.dispose_handle()
    log.debug("[CSS] Extraction successful.")
    return html


async def extract_xpath(page, expression: str, log: Optional[DebugLog] = None) -> List[Any]:
    """Evaluate ``expression`` in the page; always returns a list in document order."""
    log = log or DebugLog()
    log.debug("[XPATH] Evaluating XPath selector: %s", expression)
    try:
        outcome = await page.evaluate(XPATH_SCRIPT, expression)
    except PlaywrightError as e:
        raise XPathEvaluationError(f"{XPATH_FAILURE_PREFIX}{e.message}") from e

    kind = outcome.get("kind") if isinstance(outcome, dict) else None
    value = outcome.get("value") if isinstance(outcome, dict) else None
    if kind == "error":
        raise XPathEvaluationError(f"{XPATH_FAILURE_PREFIX}{value}")
    if kind == "nodes":
        values = list(value or [])
    elif kind in ("scalar", "node", "unknown"):
        values = [value]
    else:
        raise XPathEvaluationError(f"{XPATH_FAILURE_PREFIX}unexpected result {outcome!r}")
    log.debug("[XPATH] Evaluation successful, %d value(s).", len(values))
    return values
