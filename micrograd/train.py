import logging
import os
import sys

import numpy as np
import wandb

from .nn import MLP, sum_squared_error
from .optim import SGD


# Configure logging
def setup_logger(log_level='INFO', log_file=None):
    log_level_dict = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    level = log_level_dict.get(log_level.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        # Create the log directory if it doesn't exist
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    # Configure logging to console and optionally to file
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )
    return logging.getLogger('micrograd')

logger = logging.getLogger('micrograd')

config = {
    "num_inputs": 3,
    "hidden_sizes": [4, 4],
    "num_outputs": 1,
    "activation": "tanh",
    "lr": 0.05,
    "epochs": 500,
    "target_loss": 1e-3,
    "seed": 0,
}

# the classic four-sample binary toy problem, targets in {-1, 1}
XS = [
    [2.0, 3.0, -1.0],
    [3.0, -1.0, 0.5],
    [0.5, 1.0, 1.0],
    [1.0, 1.0, -1.0],
]
YS = [1.0, -1.0, -1.0, 1.0]


class Trainer:
    def __init__(self, model, optimizer, loss_fn, exp_name="toy", use_wandb=False):
        self.model = model
        self.optimizer = optimizer
        self.loss_fn = loss_fn
        self.exp_name = exp_name
        self.use_wandb = use_wandb
        logger.info(f"Trainer initialized for experiment {exp_name}, wandb: {use_wandb}")
        logger.info(f"Model structure: {model}")
        logger.info(f"Optimizer: {optimizer.__class__.__name__}, Learning rate: {optimizer.lr}")

    def predict(self, xs):
        """ Forward pass over every sample, first output of each """
        return [self.model(x)[0] for x in xs]

    def train_step(self, xs, ys):
        """ One full-batch gradient-descent step, returns the loss before the update """
        # build a fresh graph from the current parameter values
        logger.debug("Forward pass")
        ypred = self.predict(xs)
        loss = self.loss_fn(ypred, ys)

        # zero the gradients
        self.optimizer.zero_grad()

        # backpropagate loss
        logger.debug("Backward pass")
        loss.backward()

        # update model params
        self.optimizer.step()
        return loss.value

    def train(self, xs, ys, epochs, target_loss=0.0):
        losses = []
        logger.info(f"Starting training for up to {epochs} epochs on {len(xs)} samples")

        for i in range(epochs):
            loss = self.train_step(xs, ys)
            losses.append(loss)

            if self.use_wandb:
                wandb.log({"epoch": i + 1, "train_loss": loss})

            if i % 50 == 0:
                logger.info(f"Epoch: {i+1}, Train Loss: {loss:.6f}")

            if loss < target_loss:
                logger.info(f"Reached target loss {target_loss} after {i+1} epochs")
                break
        else:
            logger.warning(f"Target loss {target_loss} not reached after {epochs} epochs")

        logger.info(f"Training completed, final loss: {losses[-1] if losses else float('nan'):.6f}")
        return losses


def parse_args(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Train a scalar-autograd MLP on a toy dataset")
    parser.add_argument("--exp-name", type=str, default="toy")
    parser.add_argument("--epochs", type=int, default=config["epochs"])
    parser.add_argument("--lr", type=float, default=config["lr"])
    parser.add_argument("--target-loss", type=float, default=config["target_loss"])
    parser.add_argument("--hidden", type=int, nargs="+", default=config["hidden_sizes"],
                        help="Hidden layer sizes")
    parser.add_argument("--activation", type=str, default=config["activation"], choices=["tanh", "relu"])
    parser.add_argument("--seed", type=int, default=config["seed"])
    # wandb arguments
    parser.add_argument("--wandb", action="store_true", help="Enable wandb logging")
    parser.add_argument("--wandb-project", type=str, default="micrograd", help="wandb project name")
    parser.add_argument("--wandb-entity", type=str, default=None, help="wandb entity name")
    # logging arguments
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Set the logging level")
    parser.add_argument("--log-file", type=str, default=None, help="Also write logs to this file")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Setup logging
    global logger
    logger = setup_logger(args.log_level, args.log_file)

    logger.info(f"Starting training with experiment name: {args.exp_name}")
    logger.info(f"Command line arguments: {args}")

    run_config = {
        **config,
        "hidden_sizes": args.hidden,
        "activation": args.activation,
        "lr": args.lr,
        "epochs": args.epochs,
        "target_loss": args.target_loss,
        "seed": args.seed,
    }

    # Initialize wandb if enabled
    if args.wandb:
        logger.info(f"Initializing wandb with project: {args.wandb_project}, entity: {args.wandb_entity}")
        try:
            wandb.init(
                project=args.wandb_project,
                entity=args.wandb_entity,
                name=args.exp_name,
                config=run_config
            )
            logger.info("wandb initialized successfully")
        except Exception as e:
            logger.error(f"Error initializing wandb: {e}")
            logger.warning("Continuing without wandb")
            args.wandb = False

    # create model, optimizer, loss function and trainer
    rng = np.random.default_rng(run_config["seed"])
    model = MLP(run_config["num_inputs"], run_config["hidden_sizes"] + [run_config["num_outputs"]],
                activation=run_config["activation"], rng=rng)
    optimizer = SGD(model.parameters(), lr=run_config["lr"])
    logger.info(f"Total parameters: {len(model.parameters())}")

    trainer = Trainer(model, optimizer, sum_squared_error, args.exp_name, use_wandb=args.wandb)
    losses = trainer.train(XS, YS, run_config["epochs"], target_loss=run_config["target_loss"])

    for x, y, yp in zip(XS, YS, trainer.predict(XS)):
        logger.info(f"x={x} target={y:+.1f} prediction={yp.value:+.4f}")

    # Close wandb run
    if args.wandb:
        logger.info("Finishing wandb run")
        wandb.finish()

    return losses


if __name__ == "__main__":
    main()
