"""Static signal catalogs used by the directive classifier."""

from __future__ import annotations

DIRECTIVE = "'use client'"

# React hooks that only run in client components.
HOOKS = ("useState", "useEffect", "useContext", "useReducer")

CLIENT_GLOBALS = ("window", "document", "navigator")

CLIENT_EVENTS = (
    "onClick",
    "onChange",
    "onSubmit",
    "onMouseEnter",
    "onMouseLeave",
    "onScroll",
)

# Exact call expressions whose result differs between server and client renders.
DYNAMIC_FUNCTIONS = ("Math.random()", "Date.now()")

# Next.js data-fetching functions that mark a file as server-only.
SERVER_FUNCTIONS = ("getServerSideProps", "getStaticProps", "getInitialProps")
