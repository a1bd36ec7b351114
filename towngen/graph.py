"""
Graph class for pathfinding
"""


class Node:
    """Node in graph"""

    def __init__(self):
        self.links = {}  # Node -> weight

    def link(self, other, weight=1.0, symmetrical=True):
        """Link to another node"""
        self.links[other] = weight
        if symmetrical:
            other.links[self] = weight

    def unlink(self, other, symmetrical=True):
        """Unlink from another node"""
        self.links.pop(other, None)
        if symmetrical:
            other.links.pop(self, None)

    def unlink_all(self):
        """Unlink from all nodes"""
        for other in list(self.links.keys()):
            self.unlink(other)


class Graph:
    """Graph for pathfinding"""

    def __init__(self):
        self.nodes = []

    def add(self, node=None):
        """Add a node"""
        if node is None:
            node = Node()
        self.nodes.append(node)
        return node

    def remove(self, node):
        """Remove a node"""
        node.unlink_all()
        if node in self.nodes:
            self.nodes.remove(node)

    def a_star(self, start, goal, exclude=None):
        """Shortest path from start to goal avoiding excluded nodes.

        The priority of a node is the cost of the best known path to it, with
        no distance-to-goal estimate, so this behaves as Dijkstra's search.
        Returns the list of nodes or None if the goal is unreachable.
        """
        closed_set = set(exclude or [])
        open_set = [start]
        came_from = {}
        g_score = {start: 0.0}

        while len(open_set) > 0:
            # Lowest score, first one wins ties
            current = min(open_set, key=lambda n: g_score[n])

            if current is goal:
                return self._build_path(came_from, current)

            open_set.remove(current)
            closed_set.add(current)

            cur_score = g_score[current]
            for neighbour, weight in current.links.items():
                if neighbour in closed_set:
                    continue

                score = cur_score + weight
                if neighbour not in open_set:
                    open_set.append(neighbour)
                elif score >= g_score[neighbour]:
                    continue

                came_from[neighbour] = current
                g_score[neighbour] = score

        return None

    def _build_path(self, came_from, current):
        path = [current]
        while current in came_from:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return path

    def calculate_price(self, path):
        """Total weight of a path, nan if two consecutive nodes are not linked"""
        price = 0.0
        for n0, n1 in zip(path, path[1:]):
            if n1 not in n0.links:
                return float('nan')
            price += n0.links[n1]
        return price
