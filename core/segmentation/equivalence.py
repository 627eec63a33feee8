"""
MangaPanelCut - Tabela de Equivalências

Union-find com compressão de caminho sobre ids brutos de região.
A união sempre pendura a raiz maior sob a menor, então find(i) <= i
e o menor id de cada classe é o canônico.
"""

from typing import List, Optional

import numpy as np

from core.exceptions import CapacityExceededError


class EquivalenceTable:
    """
    Registro das restrições "id bruto i == id bruto j" da primeira passada.

    Args:
        capacity: Número máximo de ids brutos; None cresce sem limite
    """

    def __init__(self, capacity: Optional[int] = None):
        if capacity is not None and capacity <= 0:
            raise ValueError(f"Capacidade deve ser positiva, recebido {capacity}")
        self.capacity = capacity
        self._parent: List[int] = []
        self.merges = 0

    def __len__(self) -> int:
        return len(self._parent)

    def new_label(self) -> int:
        """Aloca o próximo id bruto (contador monotônico)."""
        label = len(self._parent)
        if self.capacity is not None and label >= self.capacity:
            raise CapacityExceededError(
                f"Mais de {self.capacity} regiões brutas; aumente LABEL_CAPACITY",
                capacity=self.capacity,
            )
        self._parent.append(label)
        return label

    def find(self, label: int) -> int:
        parent = self._parent
        while parent[label] != label:
            parent[label] = parent[parent[label]]
            label = parent[label]
        return label

    def union(self, a: int, b: int) -> int:
        """Une as classes de a e b; retorna a raiz (menor id)."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return ra
        root, child = (ra, rb) if ra < rb else (rb, ra)
        self._parent[child] = root
        self.merges += 1
        return root

    def is_canonical(self, label: int) -> bool:
        return self.find(label) == label

    def roots(self) -> np.ndarray:
        """Array roots[i] = find(i) para todos os ids brutos."""
        return np.array([self.find(i) for i in range(len(self._parent))], dtype=np.int64)
