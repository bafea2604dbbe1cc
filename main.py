from micrograd import constant, trace

if __name__ == "__main__":
    # a single tanh neuron with two inputs
    x1 = constant(2.0, label="x1")
    x2 = constant(0.0, label="x2")
    w1 = constant(-3.0, label="w1")
    w2 = constant(1.0, label="w2")
    b = constant(6.881373587019543, label="b")

    n = x1 * w1 + x2 * w2 + b
    o = n.tanh()
    o.backward()

    print(trace(o))
    print(f"x1.grad: {x1.grad}")  # -1.5
    print(f"w1.grad: {w1.grad}")  # 1.0
    print(f"x2.grad: {x2.grad}")  # 0.5
    print(f"w2.grad: {w2.grad}")  # 0.0
