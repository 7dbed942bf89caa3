"""Minimum-cost bipartite assignment between roles and candidates.

Uses the O(n^2 m) Hungarian algorithm with row/column potentials. Rows are
roles, columns are candidates, and every role must get a distinct candidate
(n <= m). Forbidden pairings are math.inf in the cost matrix.
"""

import math

from playmaker.models.assignment import AssignmentOutcome, Infeasible, SolvedAssignment


def _hungarian(cost: list[list[float]]) -> list[int]:
    """Column index assigned to each row of a finite n x m matrix (n <= m).

    Rows are inserted in declaration order and columns scanned left to right
    with strict comparisons, so equal-cost alternatives resolve the same way
    on every run.
    """
    n = len(cost)
    m = len(cost[0])
    u = [0.0] * (n + 1)
    v = [0.0] * (m + 1)
    p = [0] * (m + 1)  # p[j]: row (1-based) matched to column j, 0 = free
    way = [0] * (m + 1)

    for i in range(1, n + 1):
        p[0] = i
        j0 = 0
        minv = [math.inf] * (m + 1)
        used = [False] * (m + 1)
        while True:
            used[j0] = True
            i0 = p[j0]
            delta = math.inf
            j1 = 0
            for j in range(1, m + 1):
                if used[j]:
                    continue
                reduced = cost[i0 - 1][j - 1] - u[i0] - v[j]
                if reduced < minv[j]:
                    minv[j] = reduced
                    way[j] = j0
                if minv[j] < delta:
                    delta = minv[j]
                    j1 = j
            for j in range(m + 1):
                if used[j]:
                    u[p[j]] += delta
                    v[j] -= delta
                else:
                    minv[j] -= delta
            j0 = j1
            if p[j0] == 0:
                break
        # Augment along the alternating path
        while j0:
            j1 = way[j0]
            p[j0] = p[j1]
            j0 = j1

    result = [0] * n
    for j in range(1, m + 1):
        if p[j]:
            result[p[j] - 1] = j - 1
    return result


def _with_forbidden_cost(costs: list[list[float]]) -> list[list[float]]:
    """Replace math.inf with a cost higher than any fully-allowed assignment."""
    finite = [c for row in costs for c in row if not math.isinf(c)]
    forbidden_cost = (max(finite, default=0.0) + 1) * (len(costs) + 1)
    return [[forbidden_cost if math.isinf(c) else c for c in row] for row in costs]


def _min_total(matrix: list[list[float]], rows: list[int], columns: list[int]) -> float:
    if not rows:
        return 0.0
    sub = [[matrix[r][c] for c in columns] for r in rows]
    return sum(sub[i][j] for i, j in enumerate(_hungarian(sub)))


def _pin_in_declaration_order(costs: list[list[float]]) -> list[int]:
    """Optimal columns where each role, in order, takes its lowest-index candidate.

    Role r gets the first unused allowed column c for which c plus the best
    completion of roles r+1.. is still a minimum-cost total.
    """
    matrix = _with_forbidden_cost(costs)
    n, m = len(costs), len(costs[0])
    columns: list[int] = []
    used: set[int] = set()
    for r in range(n):
        options = []
        for c in range(m):
            if c in used or math.isinf(costs[r][c]):
                continue
            rest = [j for j in range(m) if j not in used and j != c]
            options.append((c, costs[r][c] + _min_total(matrix, list(range(r + 1, n)), rest)))
        best = min(total for _, total in options)
        column = next(
            c for c, total in options if math.isclose(total, best, rel_tol=1e-9, abs_tol=1e-9)
        )
        columns.append(column)
        used.add(column)
    return columns


def solve_assignment(
    role_ids: list[str],
    candidate_ids: list[str],
    costs: list[list[float]],
) -> AssignmentOutcome:
    """Assign every role a distinct candidate at minimum total cost.

    Among equal-cost optima, roles are settled in declaration order and each
    takes the earliest candidate that still allows a minimum total.

    Args:
        role_ids: Roles in declaration order (matrix rows)
        candidate_ids: Candidates in roster order (matrix columns)
        costs: costs[r][c] >= 0, math.inf where the pairing is forbidden

    Returns:
        SolvedAssignment, or Infeasible listing every role that cannot be filled
    """
    if not role_ids:
        return SolvedAssignment(pairs=(), costs=())

    unfillable: set[int] = set()
    reasons: list[str] = []

    dead = [r for r, row in enumerate(costs) if all(math.isinf(c) for c in row)]
    if dead:
        unfillable.update(dead)
        reasons.append("No compatible roster member")

    live = [r for r in range(len(role_ids)) if r not in unfillable]
    if len(live) > len(candidate_ids):
        unfillable.update(live)
        reasons.append(f"Roster has {len(candidate_ids)} available players for {len(live)} roles")
    elif live:
        # Every live role has some allowed candidate, but maybe not enough to go around
        picked = _hungarian(_with_forbidden_cost([costs[r] for r in live]))
        forced = [r for r, c in zip(live, picked) if math.isinf(costs[r][c])]
        if forced:
            unfillable.update(forced)
            reasons.append("Compatible roster members are already taken")

    if unfillable:
        return Infeasible(tuple(role_ids[r] for r in sorted(unfillable)), "; ".join(reasons))

    columns = _pin_in_declaration_order(costs)
    return SolvedAssignment(
        pairs=tuple((role_ids[r], candidate_ids[c]) for r, c in enumerate(columns)),
        costs=tuple(costs[r][c] for r, c in enumerate(columns)),
    )
