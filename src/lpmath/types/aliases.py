type Amount = int
type ChainId = int
type Liquidity = int
type SqrtPriceX96 = int
type Tick = int
type TickSpacing = int
