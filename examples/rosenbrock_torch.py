"""Drive a torch optimizer with the analytic Rosenbrock gradient."""

import torch

from argbench import RosenbrockTensor


def main():
    f = RosenbrockTensor(dim=4)

    x = torch.tensor([-1.2, 1.0, -1.2, 1.0], dtype=torch.float64, requires_grad=True)
    opt = torch.optim.Adam([x], lr=0.02)

    for step in range(1, 5001):
        opt.zero_grad()
        x.grad = f.gradient(x)
        opt.step()
        if step % 500 == 0:
            print(f"step {step:5d}  cost {float(f.cost(x)):.6e}")

    print("x =", x.tolist())


if __name__ == "__main__":
    main()
