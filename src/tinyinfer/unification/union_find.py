class UnionFind:
    """Disjoint sets over the ids 0..n-1."""

    def __init__(self, n: int):
        self.parent = list(range(n))

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]

        # path compression
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]

        return root

    def join(self, x: int, y: int):
        """Merge the classes of x and y. The root of y becomes the root of both."""
        self.parent[self.find(x)] = self.find(y)
