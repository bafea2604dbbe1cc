class SGD:
    """Plain gradient descent over a list of leaf parameters: p <- p - lr * dL/dp"""

    def __init__(self, params, lr=1e-2):
        if lr < 0:
            raise ValueError(f"SGD optimizer: learning rate must be at least 0, got {lr}")
        self.params = list(params)
        self.lr = lr

    def step(self):
        for p in self.params:
            p.adjust_val(-self.lr * p.grad)

    def zero_grad(self):
        for p in self.params:
            p.zero_grad()
